"""Rasterize and bundle backends.

- base: FrameEncoder interface and backend factory
- pillow_encoder: In-process Pillow backend (default)
- subprocess_encoder: rsvg-convert / ImageMagick backend
"""

from gifhub.encoding.base import FrameEncoder, create_encoder
from gifhub.encoding.pillow_encoder import PillowEncoder
from gifhub.encoding.subprocess_encoder import SubprocessEncoder

__all__ = ['FrameEncoder', 'create_encoder', 'PillowEncoder', 'SubprocessEncoder']
