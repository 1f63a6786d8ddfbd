from enum import IntEnum


class ErrorNumber(IntEnum):
    NoError = 0
    InvalidArgument = -1
    NotSupported = -2
    NoData = -3
    InOutError = -4
    OutOfMemory = -5
