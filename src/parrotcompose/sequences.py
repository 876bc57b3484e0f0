"""Whole-sequence replication and LCM reconciliation.

Two animations of lengths a and b line up frame for frame after both are
repeated to lcm(a, b). Repetition always appends the entire original
sequence, so index i of the result is element i mod len(original).
"""

import math


def least_common_multiple(a: int, b: int) -> int:
    """Integer LCM via the Euclidean GCD.

    Raises:
        ValueError: If either length is not positive (empty sequence).
    """
    if a <= 0 or b <= 0:
        raise ValueError(
            f"Cannot reconcile sequences of length {a} and {b}: "
            "lengths must be positive"
        )
    return a * b // math.gcd(a, b)


def replicate_to_length(sequence, target_length: int) -> list:
    """Concatenate the whole sequence onto itself until len >= target_length.

    The result length is ceil(target_length / len(sequence)) * len(sequence)
    and may overshoot the target. A target already covered returns a copy.

    Raises:
        ValueError: If the sequence is empty.
    """
    original = list(sequence)
    if not original:
        raise ValueError("Cannot replicate an empty sequence")

    result = list(original)
    while len(result) < target_length:
        result.extend(original)
    return result
