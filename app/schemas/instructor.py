from typing import List

from app.schemas.announcement import AnnouncementOut
from app.schemas.course import CourseOut, RosterEntry


class InstructorCourseDetailOut(CourseOut):
    students: List[RosterEntry] = []
    announcements: List[AnnouncementOut] = []
