"""Audio services: text-to-speech and transcription.

``speech`` posts a JSON body and returns the raw audio bytes (format chosen by
``response_format``). ``transcribe`` posts ``multipart/form-data``: the request
model is flattened into text fields and the audio file is attached as the
``file`` part.
"""

from __future__ import annotations

from typing import Any, Optional

from ..base.cancellation import CancellationToken
from ..base.encoding import encode_multipart, file_part, to_form_data, to_json_payload
from ..base.models import FilePayload, SpeechRequest, TranscriptionRequest, TranscriptionResponse
from ..base.transport import TransportClient
from ..config.defaults import SPEECH_DEFAULT_MODEL, SPEECH_DEFAULT_VOICE, TRANSCRIPTION_DEFAULT_MODEL

SPEECH_PATH = "audio/speech"
TRANSCRIPTIONS_PATH = "audio/transcriptions"


class Audio:
    def __init__(self, transport: TransportClient) -> None:
        self._transport = transport

    async def speech(
        self,
        request: SpeechRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> bytes:
        """Synthesize speech; returns the audio bytes."""
        return await self._transport.send(
            "POST",
            SPEECH_PATH,
            json_body=to_json_payload(request),
            binary=True,
            cancel=cancel,
            model=request.model,
        )

    async def transcribe(
        self,
        request: TranscriptionRequest,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> TranscriptionResponse:
        """Transcribe the request's audio file."""
        form = to_form_data(encode_multipart(request))
        return await self._transport.send(
            "POST",
            TRANSCRIPTIONS_PATH,
            form=form,
            files=[("file", file_part(request.file))],
            response_model=TranscriptionResponse,
            cancel=cancel,
            model=request.model,
        )

    async def speak(
        self,
        text: str,
        *,
        voice: str = SPEECH_DEFAULT_VOICE,
        model: str = SPEECH_DEFAULT_MODEL,
        response_format: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> bytes:
        return await self.speech(
            SpeechRequest(model=model, input=text, voice=voice, response_format=response_format),
            cancel=cancel,
        )

    async def transcribe_file(
        self,
        file: FilePayload,
        *,
        model: str = TRANSCRIPTION_DEFAULT_MODEL,
        cancel: Optional[CancellationToken] = None,
        **params: Any,
    ) -> TranscriptionResponse:
        """Transcribe ``file``; ``params`` (``language``, ``prompt``...) become form fields."""
        request = TranscriptionRequest(file=file, model=model)
        request.with_extensions({k: v for k, v in params.items() if v is not None})
        return await self.transcribe(request, cancel=cancel)


__all__ = ["Audio", "SPEECH_PATH", "TRANSCRIPTIONS_PATH"]
