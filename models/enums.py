# models/enums.py

from enum import Enum, IntEnum


class Month(IntEnum):
    JAN = 0
    FEB = 1
    MAR = 2
    APR = 3
    MAY = 4
    JUN = 5
    JUL = 6
    AUG = 7
    SEP = 8
    OCT = 9
    NOV = 10
    DEC = 11


class ViewShift(str, Enum):
    MONTH_BACK = "month_back"
    MONTH_FORWARD = "month_forward"
    FOCUS_BACK = "focus_back"
    FOCUS_FORWARD = "focus_forward"

    @property
    def is_focus(self) -> bool:
        return self in (ViewShift.FOCUS_BACK, ViewShift.FOCUS_FORWARD)
