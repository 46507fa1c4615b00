from .user import UserModel
from .profile import ProfileModel
from .doctor import DoctorModel
from .appointment import AppointmentModel

__all__ = ["UserModel", "ProfileModel", "DoctorModel", "AppointmentModel"]
