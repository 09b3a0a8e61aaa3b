from catalog.extensions import db
from catalog.models.timestamps import TimestampMixin


class Subject(TimestampMixin, db.Model):
    __tablename__ = "subjects"

    id = db.Column(db.Integer, primary_key=True)
    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=False
    )
    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.String(50), unique=True, nullable=False)
    description = db.Column(db.String(255))

    department = db.relationship("Department", back_populates="subjects")
    classes = db.relationship("Class", back_populates="subject")

    def to_dict(self):
        return {
            "id": self.id,
            "departmentId": self.department_id,
            "name": self.name,
            "code": self.code,
            "description": self.description,
            **self._timestamps(),
        }
