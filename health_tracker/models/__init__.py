from .user import User
from .health_record import HealthRecord
from .vital_sign import VitalSign, TIMES_OF_DAY

__all__ = ["User", "HealthRecord", "VitalSign", "TIMES_OF_DAY"]
