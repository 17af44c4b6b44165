# app/models/enums/service_options.py
import enum

class ShootType(str, enum.Enum):
    traditional = "Traditional"
    candid = "Candid"


class ServiceStage(str, enum.Enum):
    stage = "Stage"
    reception = "Reception"
    extra = "Extra"


class SessionType(str, enum.Enum):
    half = "Half Session"
    full = "Full Session"
    one_and_half = "1.5 Session"
    two = "2 Sessions"
    others = "Others"
