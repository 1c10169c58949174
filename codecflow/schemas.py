from typing import Literal, Optional

from pydantic import BaseModel, Field


class CodecToken(BaseModel):
    type: str = Field(..., description="The matched codec type tag, case as written in the input.")
    details: str = Field("", description="Remainder of the codec token after the type tag.")
    category: Literal["video", "audio", "unknown"] = Field(
        "unknown", description="Classification of the token. Positionally assigned tokens stay 'unknown'."
    )


class ParsedCodecInfo(BaseModel):
    video: Optional[CodecToken] = None
    audio: Optional[CodecToken] = None
    dropped: list[str] = Field(
        default_factory=list, description="Unclassified codecs that could not be assigned to a free slot."
    )

    @property
    def codec_count(self) -> int:
        return int(self.video is not None) + int(self.audio is not None)


class MimeDescriptor(BaseModel):
    media_type: Literal["audio", "video"]
    container: Literal["mp4", "webm", "ogg"]
    codecs: str = Field(..., description="The original, untranslated codec string.")

    @property
    def mime(self) -> str:
        return f'{self.media_type}/{self.container};codecs="{self.codecs}"'

    def __str__(self) -> str:
        return self.mime


class SupportsCodecRequest(BaseModel):
    codecs: str = Field(..., description="The codec string to check.")
    supported_types: list[str] = Field(
        default_factory=list,
        description="MIME strings (or bare 'type/container' values) the client platform reports as playable.",
    )


class PlaylistCodecsRequest(BaseModel):
    content: str = Field(..., description="The content of the HLS master playlist.")
    base_url: Optional[str] = Field(None, description="Base URL for resolving relative playlist URIs.")
    audio_group: Optional[str] = Field(
        None, description="Audio group to report the default rendition codecs for. Defaults to the first group."
    )


class VariantCodecs(BaseModel):
    uri: str
    bandwidth: Optional[int] = None
    codecs: str
    parsed: ParsedCodecInfo
    mime: Optional[str] = None
    muxer_supported: bool = False


class PlaylistCodecsResponse(BaseModel):
    variants: list[VariantCodecs] = Field(default_factory=list)
    default_audio: Optional[ParsedCodecInfo] = None
