"""In-process rasterize/bundle backend built on Pillow."""

import io
import logging
from typing import List

from PIL import Image

from gifhub.contracts.failure import EncodeError
from gifhub.encoding.base import FrameEncoder

__all__ = ['PillowEncoder']

logger = logging.getLogger(__name__)


class PillowEncoder(FrameEncoder):
    """Encode frames without leaving the process.

    ``rasterize`` expects PNG input (the renderer already rasterizes with
    Agg) and normalizes it to RGB. ``bundle`` quantizes every frame to an
    adaptive 256 color palette and writes a looping GIF. Pixel content is
    lossy through quantization; frame count and timing are exact, as long as
    consecutive frames differ (Pillow merges identical neighbours).
    """

    source_format = "png"

    def rasterize(self, source: bytes) -> bytes:
        try:
            with Image.open(io.BytesIO(source)) as img:
                rgb = img.convert("RGB")
            buf = io.BytesIO()
            rgb.save(buf, format="PNG")
        except (OSError, ValueError) as e:
            raise EncodeError(f"rasterize: {e}") from e
        return buf.getvalue()

    def bundle(self, frames: List[bytes], duration_ms: int, scale: float) -> bytes:
        """Bundle PNG frames into a GIF.

        Parameters
        ----------
        frames : list of bytes
            Equal-size PNG frames in display order.
        duration_ms : int
            Display time of every frame in milliseconds. GIF stores
            hundredths of a second, so sub-10 ms precision is lost.
        scale : float
            Resize factor applied to every frame.

        Returns
        -------
        bytes
            The encoded GIF.

        Raises
        ------
        EncodeError
            Invalid arguments, frames of differing size, or any Pillow failure.
        """
        self.check_bundle_args(frames, duration_ms, scale)

        try:
            images = []
            for data in frames:
                with Image.open(io.BytesIO(data)) as img:
                    images.append(img.convert("RGB"))
        except (OSError, ValueError) as e:
            raise EncodeError(f"GIF: could not decode frame: {e}") from e

        sizes = {img.size for img in images}
        if len(sizes) != 1:
            raise EncodeError(f"GIF: frames have differing sizes {sorted(sizes)}")

        if scale != 1.0:
            w, h = images[0].size
            size = (max(1, round(w * scale)), max(1, round(h * scale)))
            images = [img.resize(size, Image.Resampling.LANCZOS) for img in images]

        paletted = [img.convert("P", palette=Image.Palette.ADAPTIVE) for img in images]

        buf = io.BytesIO()
        try:
            paletted[0].save(
                buf,
                format="GIF",
                save_all=True,
                append_images=paletted[1:],
                duration=duration_ms,
                loop=0,
                optimize=False,
            )
        except (OSError, ValueError) as e:
            raise EncodeError(f"GIF: {e}") from e

        logger.info("Bundled %d frames (%d ms each, scale %.2f) into %d bytes",
                    len(paletted), duration_ms, scale, buf.tell())
        return buf.getvalue()
