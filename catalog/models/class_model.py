from sqlalchemy.dialects.postgresql import JSONB

from catalog.extensions import db
from catalog.models.timestamps import TimestampMixin


class Class(TimestampMixin, db.Model):
    __tablename__ = "classes"

    id = db.Column(db.Integer, primary_key=True)
    subject_id = db.Column(
        db.Integer,
        db.ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False
    )
    # Expected to point at a user with role "teacher"; not checked here
    teacher_id = db.Column(
        db.String(255),
        db.ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False
    )
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    invite_code = db.Column(db.String(50), index=True)

    # JSONB on PostgreSQL: plain json has no equality operator for GROUP BY
    schedules = db.Column(
        db.JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list
    )

    subject = db.relationship("Subject", back_populates="classes")
    teacher = db.relationship("User", back_populates="taught_classes")
    enrollments = db.relationship("Enrollment", back_populates="class_")

    def to_dict(self):
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "teacherId": self.teacher_id,
            "name": self.name,
            "description": self.description,
            "inviteCode": self.invite_code,
            "schedules": self.schedules or [],
            **self._timestamps(),
        }
