from app.models.user import User, UserRole
from app.models.student import Student
from app.models.training_slot import TrainingSlot
from app.models.attendance import AttendanceRecord
from app.models.document import Document

__all__ = ["User", "UserRole", "Student", "TrainingSlot", "AttendanceRecord", "Document"]
