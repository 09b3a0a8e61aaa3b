from catalog.extensions import db
from catalog.models.timestamps import TimestampMixin

ROLES = ("teacher", "student", "admin")


class User(TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(255), primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    email_verified = db.Column(db.Boolean, default=False, nullable=False)
    image = db.Column(db.String(512))
    image_cld_pub_id = db.Column(db.String(255))
    role = db.Column(
        db.Enum(*ROLES, name="role"),
        default="student",
        nullable=False
    )

    taught_classes = db.relationship("Class", back_populates="teacher")
    enrollments = db.relationship("Enrollment", back_populates="student")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "emailVerified": self.email_verified,
            "image": self.image,
            "imageCldPubId": self.image_cld_pub_id,
            "role": self.role,
            **self._timestamps(),
        }
