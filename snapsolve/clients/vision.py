"""Client for the ``/groq-vision`` endpoint of the proxy.

The endpoint takes a prompt plus a base64 JPEG and returns the model's text
answer. Math solving is two requests: a YES/NO detection pass, then the solve
prompt.
"""

from __future__ import annotations

import httpx
from PIL import Image

from snapsolve.imaging.codec import DEFAULT_JPEG_QUALITY, JPEG_MIME_TYPE, encode_jpeg_base64

from .base import ProxyClientBase
from .errors import (
    ImageConversionError,
    ImageTooLargeError,
    NoMathFoundError,
    PromptTooLongError,
    ProxyApiError,
    VisionEncodingError,
    VisionInvalidResponseError,
    VisionInvalidURLError,
    VisionNetworkError,
    VisionServerError,
)
from .models import VisionRequestDTO, VisionResponseDTO

MAX_PROMPT_LENGTH = 4000
MAX_IMAGE_BASE64_SIZE = 10 * 1024 * 1024

DETECTION_PROMPT = (
    "Look at this image and determine if it contains mathematical problems, equations, formulas, "
    "or mathematical content that can be solved. Respond with ONLY 'YES' if it contains solvable math "
    "content, or 'NO' if it doesn't contain any mathematical problems to solve."
)

SOLVE_PROMPT = (
    "Solve the mathematical problem(s) shown in this image. Provide a clear step-by-step solution "
    "with the final answer. If there are multiple problems, solve them all."
)


class VisionClient(ProxyClientBase):
    """Async client for vision requests."""

    endpoint = "/groq-vision"
    invalid_url_error = VisionInvalidURLError
    network_error = VisionNetworkError
    invalid_response_error = VisionInvalidResponseError
    server_error = VisionServerError

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
        max_prompt_length: int = MAX_PROMPT_LENGTH,
        max_image_base64_size: int = MAX_IMAGE_BASE64_SIZE,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    ) -> None:
        super().__init__(base_url, timeout=timeout, client=client)
        self.max_prompt_length = max_prompt_length
        self.max_image_base64_size = max_image_base64_size
        self.jpeg_quality = jpeg_quality

    def _fallback_server_error(self, r: httpx.Response) -> ProxyApiError:
        text = r.text or "Unknown server error"
        return VisionServerError(
            f"Server returned status code {r.status_code}. {text}", status_code=r.status_code, details=r.text
        )

    async def perform_vision_request(self, prompt: str, image: Image.Image) -> str:
        """Send ``prompt`` and ``image`` to the vision endpoint.

        Args:
            prompt: Instruction for the vision model
            image: Image to analyse, sent as JPEG

        Returns:
            The model's ``responseText``

        Raises:
            VisionError: one subclass per failure kind
        """
        if len(prompt) > self.max_prompt_length:
            raise PromptTooLongError(len(prompt), self.max_prompt_length)

        self._url()

        try:
            image_base64 = encode_jpeg_base64(image, self.jpeg_quality)
        except (OSError, ValueError) as e:
            raise ImageConversionError(e) from e

        if len(image_base64) > self.max_image_base64_size:
            raise ImageTooLargeError(len(image_base64), self.max_image_base64_size)

        payload = VisionRequestDTO(prompt=prompt, image_base64=image_base64, mime_type=JPEG_MIME_TYPE)
        try:
            body = self._encode(payload)
        except (TypeError, ValueError) as e:
            raise VisionEncodingError(e) from e

        result = await self._post(body, VisionResponseDTO)
        return result.response_text

    async def detect_math_content(self, image: Image.Image) -> bool:
        """True when the model answers exactly YES to the detection prompt."""
        response = await self.perform_vision_request(DETECTION_PROMPT, image)
        return response.strip().upper() == "YES"

    async def solve_math_problem(self, image: Image.Image) -> str:
        """Detect math content, then ask for a step-by-step solution.

        Raises:
            NoMathFoundError: when detection answers anything but YES
        """
        if not await self.detect_math_content(image):
            self._logger.info("VisionClient.solve_math_problem: no math detected")
            raise NoMathFoundError()
        return await self.perform_vision_request(SOLVE_PROMPT, image)
