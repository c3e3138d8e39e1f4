def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the closed interval [low, high]."""
    return min(max(value, low), high)

def lerp(start: float, stop: float, t: float) -> float:
    """Linear interpolation between start and stop."""
    return start + (stop - start) * t

def remap(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map value from [in_min, in_max] onto [out_min, out_max] without clamping."""
    if in_max == in_min:
        return out_min
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)
