from catalog.extensions import db
from catalog.models.timestamps import TimestampMixin


class Enrollment(TimestampMixin, db.Model):
    __tablename__ = "enrollments"

    id = db.Column(db.Integer, primary_key=True)
    # No unique (student_id, class_id) constraint; duplicates are possible
    student_id = db.Column(
        db.String(255),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    class_id = db.Column(
        db.Integer,
        db.ForeignKey("classes.id", ondelete="CASCADE"),
        nullable=False
    )

    student = db.relationship("User", back_populates="enrollments")
    class_ = db.relationship("Class", back_populates="enrollments")
