# renderer/tone_mapping.py
import numpy as np

def clamp_tone_mapping(linear: np.ndarray) -> np.ndarray:
    """
    Convert a linear color image to 8-bit: NaN becomes 0, every channel is
    clamped to [0, 1], scaled by 255 and truncated.
    """
    clean = np.nan_to_num(linear, nan=0.0, posinf=1.0, neginf=0.0)
    return (np.clip(clean, 0.0, 1.0) * 255).astype(np.uint8)
