from .models import Arm, LongitudinalRecord, RedcapRecord

__all__ = ["Arm", "LongitudinalRecord", "RedcapRecord"]
