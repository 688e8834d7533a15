"""
ABOUTME: Sized numeric marker types for annotating configuration fields
ABOUTME: Lets a field declare the bit width its environment value must fit
"""

from typing import NewType

# Plain ``int`` fields are bounded like Int64; plain ``float`` is double precision.
Int64 = NewType("Int64", int)
Uint = NewType("Uint", int)
Uint64 = NewType("Uint64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

# (minimum, maximum) accepted by each integer type
INT_BOUNDS = {
    int: (INT64_MIN, INT64_MAX),
    Int64: (INT64_MIN, INT64_MAX),
    Uint: (0, UINT64_MAX),
    Uint64: (0, UINT64_MAX),
}
