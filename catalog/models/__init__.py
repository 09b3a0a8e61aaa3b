from catalog.models.department import Department
from catalog.models.subject import Subject
from catalog.models.class_model import Class
from catalog.models.user import User
from catalog.models.enrollment import Enrollment
