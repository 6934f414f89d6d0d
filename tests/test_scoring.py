"""
Score totals, ranking and CSV export.
"""

import csv
import io

from bootcamp.services.scoring import INACTIVE_RANK, ScoreService
from conftest import add_result, make_mentor, make_student


class TestTotals:

    def test_weighted_sum(self):
        assert ScoreService.calculate_total_score([(80, 1), (50, 0.5), (None, 2)]) == 105.0

    def test_missing_weight_counts_as_one(self):
        assert ScoreService.calculate_total_score([(10, None)]) == 10

    def test_rounded_to_one_decimal(self):
        assert ScoreService.calculate_total_score([(1, 0.33), (1, 0.33)]) == 0.7

    def test_competition_ranking(self):
        ranks = ScoreService.rank_totals([(1, 80), (2, 50), (3, 80), (4, 10)])
        assert ranks == {1: 1, 3: 1, 2: 3, 4: 4}

    def test_empty(self):
        assert ScoreService.rank_totals([]) == {}


class TestRefresh:

    def test_refresh_course_score(self, course, course_task):
        alice = make_student(course, 'alice')
        bob = make_student(course, 'bob')
        carol = make_student(course, 'carol')
        dave = make_student(course, 'dave', active=False)
        add_result(alice, course_task, 80)
        add_result(bob, course_task, 80)
        add_result(carol, course_task, 50)
        add_result(dave, course_task, 100)

        assert ScoreService.refresh_course_score(course.id) == 4

        assert (alice.total_score, alice.rank) == (80, 1)
        assert bob.rank == 1
        assert carol.rank == 3
        assert dave.total_score == 100
        assert dave.rank == INACTIVE_RANK

    def test_refresh_all_skips_completed_courses(self, course, course_task):
        student = make_student(course, 'alice')
        add_result(student, course_task, 40)
        course.completed = True

        assert ScoreService.refresh_all_scores() == 0
        assert student.total_score == 0

    def test_score_table(self, course, course_task):
        mentor = make_mentor(course, 'mentor1')
        alice = make_student(course, 'alice', mentor=mentor)
        make_student(course, 'bob', active=False)
        add_result(alice, course_task, 70)
        ScoreService.refresh_course_score(course.id)

        active = ScoreService.get_course_score(course.id)
        assert [s['githubId'] for s in active] == ['alice']
        assert active[0]['taskResults'] == [{'courseTaskId': course_task.id, 'score': 70}]
        assert active[0]['mentor']['githubId'] == 'mentor1'

        everyone = ScoreService.get_course_score(course.id, active_only=False)
        assert [s['githubId'] for s in everyone] == ['alice', 'bob']


class TestCsvExport:

    def test_one_column_per_task(self, course, course_task):
        alice = make_student(course, 'alice', first_name='Alice')
        make_student(course, 'bob')
        add_result(alice, course_task, 90)
        ScoreService.refresh_course_score(course.id)

        rows = list(csv.reader(io.StringIO(ScoreService.export_csv(course.id))))

        assert rows[0] == ['rank', 'githubId', 'name', 'locationName', 'totalScore', 'Songbird', 'mentorGithubId']
        assert rows[1] == ['1', 'alice', 'Alice', '', '90.0', '90.0', '']
        assert rows[2][1] == 'bob'
        assert rows[2][5] == '0'
