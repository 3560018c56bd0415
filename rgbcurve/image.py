"""Apply curve LUTs to whole images.

Images are channel-last arrays, ``[..., C]`` with C >= 3 (RGB first, any
extra channel such as alpha is passed through). Integer arrays are read as
0-255 levels. Float arrays and torch tensors are read as 0-1 values, the
layout ComfyUI uses for its ``[B, H, W, C]`` image batches.
"""

from __future__ import annotations

import numpy as np
import torch

from rgbcurve.services.lut import compose_channel_tables
from rgbcurve.services.schemas import LUT_SIZE, MAX_VALUE, LUTSet, validate_channel

# Rec.709 luma weights
LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)


def _check_channels(shape: tuple[int, ...]) -> None:
    if len(shape) < 1 or shape[-1] < 3:
        raise ValueError(f"expected a channel-last image with at least 3 channels, got shape {tuple(shape)}")


def _to_levels(values: np.ndarray) -> np.ndarray:
    if np.issubdtype(values.dtype, np.integer):
        return np.clip(values, 0, MAX_VALUE).astype(np.intp)
    return np.clip(values * MAX_VALUE, 0, MAX_VALUE).astype(np.intp)


def _apply_numpy(img: np.ndarray, lut: LUTSet) -> np.ndarray:
    tables = compose_channel_tables(lut)
    result = img.copy()
    integer = np.issubdtype(img.dtype, np.integer)
    for ch in range(3):
        mapped = tables[ch][_to_levels(img[..., ch])]
        result[..., ch] = mapped if integer else mapped / float(MAX_VALUE)
    return result


def apply_lut_to_image(image, lut: LUTSet):
    """Apply per-channel curves then the master curve to every pixel.

    Returns the same kind of object it was given (numpy array or torch tensor,
    same dtype and device).
    """
    if isinstance(image, torch.Tensor):
        _check_channels(tuple(image.shape))
        src = image.detach().cpu()
        if src.is_floating_point():
            result = np.clip(_apply_numpy(src.to(torch.float64).numpy(), lut), 0, 1)
        else:
            result = _apply_numpy(src.numpy(), lut)
        return torch.from_numpy(result).to(image.device, dtype=image.dtype)
    if isinstance(image, np.ndarray):
        _check_channels(image.shape)
        return _apply_numpy(image, lut)
    raise TypeError(f"unsupported image type {type(image).__name__}")


def compute_histogram(image, channel: str = "master") -> np.ndarray:
    """256-bin histogram of one channel scaled so the tallest bin is 255.

    The master histogram is taken over Rec.709 luminance.
    """
    channel = validate_channel(channel)
    if isinstance(image, torch.Tensor):
        image = image.detach().cpu().numpy()
    if not isinstance(image, np.ndarray):
        raise TypeError(f"unsupported image type {type(image).__name__}")
    _check_channels(image.shape)

    if channel == "master":
        values = image[..., 0] * LUMINANCE_WEIGHTS[0] \
            + image[..., 1] * LUMINANCE_WEIGHTS[1] \
            + image[..., 2] * LUMINANCE_WEIGHTS[2]
        if np.issubdtype(image.dtype, np.integer):
            values = np.rint(values)
            levels = np.clip(values, 0, MAX_VALUE).astype(np.intp)
        else:
            levels = _to_levels(values)
    else:
        levels = _to_levels(image[..., ("red", "green", "blue").index(channel)])

    counts = np.bincount(levels.ravel(), minlength=LUT_SIZE)
    peak = counts.max()
    if peak == 0:
        return np.zeros(LUT_SIZE, dtype=np.uint8)
    return (counts * MAX_VALUE // peak).astype(np.uint8)
