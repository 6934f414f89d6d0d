"""
Score Service
Course score table: weighted totals, ranking and CSV export.
"""

import csv
import io
import logging
from typing import Iterable, List, Dict, Any, Tuple

from bootcamp.models import db, Course, CourseTask, Student, TaskResult, User
from bootcamp.services.course import CourseService, user_to_dict

logger = logging.getLogger(__name__)

# Rank given to expelled students so they sink to the bottom
INACTIVE_RANK = 999999


class ScoreService:
    """
    Course scoring.
    Totals are materialized on Student rows by the refresh job.
    """

    @staticmethod
    def calculate_total_score(results: Iterable[Tuple[float, float]]) -> float:
        """
        Sum of score * weight.

        Args:
            results: (score, score_weight) pairs

        Returns:
            Total rounded to one decimal
        """
        total = sum((score or 0) * (weight if weight is not None else 1) for score, weight in results)
        return round(total, 1)

    @staticmethod
    def rank_totals(totals: List[Tuple[int, float]]) -> Dict[int, int]:
        """
        Competition ranking by total, highest first.
        Equal totals share a rank; the next rank skips accordingly (1, 1, 3).
        """
        ordered = sorted(totals, key=lambda item: item[1], reverse=True)
        ranks = {}
        previous_total = None
        previous_rank = 0
        for position, (student_id, total) in enumerate(ordered, start=1):
            rank = previous_rank if total == previous_total else position
            ranks[student_id] = rank
            previous_total, previous_rank = total, rank
        return ranks

    @staticmethod
    def refresh_course_score(course_id: int) -> int:
        """Recompute total_score and rank for every student of a course."""
        weights = {
            ct.id: ct.score_weight
            for ct in CourseTask.query.filter_by(course_id=course_id).all()
        }
        students = Student.query.filter_by(course_id=course_id).all()

        active_totals = []
        for student in students:
            results = [
                (r.score, weights[r.course_task_id])
                for r in student.results
                if r.course_task_id in weights
            ]
            student.total_score = ScoreService.calculate_total_score(results)
            if student.is_active:
                active_totals.append((student.id, student.total_score))
            else:
                student.rank = INACTIVE_RANK

        ranks = ScoreService.rank_totals(active_totals)
        for student in students:
            if student.id in ranks:
                student.rank = ranks[student.id]

        db.session.commit()
        return len(students)

    @staticmethod
    def refresh_all_scores() -> int:
        """Refresh every course that is still running. Returns students updated."""
        updated = 0
        courses = Course.query.filter(db.or_(Course.completed.is_(False), Course.completed.is_(None))).all()
        for course in courses:
            try:
                updated += ScoreService.refresh_course_score(course.id)
            except Exception as e:
                logger.error(f"[Score] Refresh failed for course {course.id}: {e}")
                db.session.rollback()
        logger.info(f"[Score] Refreshed {updated} students in {len(courses)} courses")
        return updated

    @staticmethod
    def get_course_score(course_id: int, active_only: bool = True) -> List[Dict[str, Any]]:
        query = Student.query.filter_by(course_id=course_id)
        if active_only:
            query = query.filter_by(is_active=True)
        students = (
            query.join(User, Student.user_id == User.id)
            .order_by(Student.rank.asc(), User.github_id.asc())
            .all()
        )
        return [ScoreService.student_score_to_dict(s) for s in students]

    @staticmethod
    def student_score_to_dict(student: Student) -> Dict[str, Any]:
        user = student.user
        results = student.results.order_by(TaskResult.course_task_id.asc()).all()
        return {
            'id': student.id,
            'githubId': user.github_id,
            'name': user.name,
            'locationName': user.location_name,
            'isActive': bool(student.is_active),
            'totalScore': student.total_score or 0,
            'rank': student.rank,
            'mentor': user_to_dict(student.mentor.user) if student.mentor else None,
            'taskResults': [
                {'courseTaskId': r.course_task_id, 'score': r.score}
                for r in results
            ],
        }

    @staticmethod
    def export_csv(course_id: int) -> str:
        """Score table as CSV with one column per course task."""
        course_tasks = CourseService(course_id).get_course_tasks()
        rows = ScoreService.get_course_score(course_id, active_only=False)

        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(
            ['rank', 'githubId', 'name', 'locationName', 'totalScore']
            + [ct.task.name if ct.task else str(ct.id) for ct in course_tasks]
            + ['mentorGithubId']
        )
        for row in rows:
            scores = {r['courseTaskId']: r['score'] for r in row['taskResults']}
            writer.writerow(
                [row['rank'], row['githubId'], row['name'], row['locationName'] or '', row['totalScore']]
                + [scores.get(ct.id, 0) for ct in course_tasks]
                + [row['mentor']['githubId'] if row['mentor'] else '']
            )
        return output.getvalue()
