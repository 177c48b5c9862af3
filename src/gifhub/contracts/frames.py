"""Sink contract.

Frames crossing the encoder boundary must all share one size.
"""

import io
from typing import List

from PIL import Image

from gifhub.contracts.base import require


def assert_uniform_frames(frames: List[bytes]) -> tuple:
    """Enforce that all raster frames have equal dimensions.

    Parameters
    ----------
    frames : list of bytes
        Encoded raster images (PNG), in display order.

    Returns
    -------
    tuple of (int, int)
        The shared (width, height).

    Raises
    ------
    ContractViolation
        If the list is empty or sizes differ.
    """
    require(len(frames) > 0, "Frame contract violated: no frames to encode")

    sizes = []
    for data in frames:
        with Image.open(io.BytesIO(data)) as img:
            sizes.append(img.size)

    require(
        len(set(sizes)) == 1,
        f"Frame contract violated: frames have differing sizes {sorted(set(sizes))}"
    )
    return sizes[0]
