"""
Codec string classification for adaptive streaming playback.

Parses RFC 6381 style codec strings (``"avc1.4d400d,mp4a.40.2"``) into
structured codec info, resolves the MIME type and container for a codec set,
and answers whether the client platform can decode it or the remuxer can
repackage it. Every function here is a pure function of its input.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from codecflow.const import (
    CODEC_CATEGORY_PATTERNS,
    CONTAINER_PATTERNS,
    DEFAULT_CONTAINER,
    DEFAULT_MEDIA_TYPE,
    LEGACY_AVC_PATTERN,
    MUXER_PATTERNS,
)
from codecflow.schemas import CodecToken, MimeDescriptor, ParsedCodecInfo

logger = logging.getLogger(__name__)

_CATEGORY_PATTERNS = dict(CODEC_CATEGORY_PATTERNS)


def _hex_byte(value: str) -> str:
    # only the low byte is kept; 10**8 is a multiple of 256
    return format(int(value[-8:]) % 256, "02x")


def _legacy_avc_to_hex(match) -> str:
    return "avc1." + _hex_byte(match.group(1)) + "00" + _hex_byte(match.group(2))


def translate_legacy_codec(codec: Optional[str]) -> Optional[str]:
    """
    Replace the old apple-style ``avc1.<dd>.<dd>`` codecs with the standard ``avc1.<hhhhhh>``.

    The codec string is walked field by field, so a legacy codec embedded in a
    larger codec list is rewritten without touching its neighbours.

    Args:
        codec (str): The codec string to translate. ``None`` or empty values are returned unchanged.

    Returns:
        str: The translated codec string.
    """
    if not codec:
        return codec

    return ",".join(LEGACY_AVC_PATTERN.sub(_legacy_avc_to_hex, field) for field in codec.split(","))


def translate_legacy_codecs(codecs: list[str]) -> list[str]:
    """Translate a list of codec strings, see :func:`translate_legacy_codec`."""
    return [translate_legacy_codec(codec) for codec in codecs]


def is_video_codec(codec: str = "") -> bool:
    return _CATEGORY_PATTERNS["video"].match(codec.strip().lower()) is not None


def is_audio_codec(codec: str = "") -> bool:
    return _CATEGORY_PATTERNS["audio"].match(codec.strip().lower()) is not None


def parse_codecs(
    codec_string: Optional[str] = "", on_dropped: Optional[Callable[[list[str]], None]] = None
) -> ParsedCodecInfo:
    """
    Parses a codec string into its video and audio codecs.

    Each codec is tested against the video pattern and then the audio pattern;
    when both match, the codec is recorded only under the later one. Codecs
    matching neither fill the free video slot first and the free audio slot
    second, in input order. Whatever is left over is reported in ``dropped`` and passed to ``on_dropped``.

    Args:
        codec_string (str, optional): The comma-separated codec string. Defaults to "".
        on_dropped (Callable[[list[str]], None], optional): Called with the codecs that could not be placed.

    Returns:
        ParsedCodecInfo: The parsed codec info. Never raises for malformed input.
    """
    result = ParsedCodecInfo()
    unknown = []

    if not (codec_string or "").strip():
        return result

    for codec in codec_string.split(","):
        codec = codec.strip()

        codec_type = match = None
        for name, pattern in CODEC_CATEGORY_PATTERNS:
            category_match = pattern.match(codec.lower())
            if category_match:
                codec_type, match = name, category_match

        if codec_type is None:
            unknown.append(codec)
            continue

        # maintain codec case
        type_tag = codec[: len(match.group(1))]
        setattr(result, codec_type, CodecToken(type=type_tag, details=codec[len(type_tag) :], category=codec_type))

    # If all codecs are unknown the first one is video and the second one audio
    dropped = []
    for codec in unknown:
        if result.video is None:
            result.video = CodecToken(type=codec)
        elif result.audio is None:
            result.audio = CodecToken(type=codec)
        else:
            dropped.append(codec)

    if dropped:
        logger.debug(f"Could not identify codecs {dropped} in codec string {codec_string!r}")
        result.dropped = dropped
        if on_dropped is not None:
            on_dropped(dropped)

    return result


def codecs_from_default(manifest: Optional[Mapping[str, Any]], audio_group_id: Optional[str]) -> Optional[ParsedCodecInfo]:
    """
    Returns the codec info of the default rendition of an alternate audio group.

    Args:
        manifest (Mapping): The master manifest, with renditions under ``mediaGroups.AUDIO.<group>.<name>``.
        audio_group_id (str): ID of the audio group to look up.

    Returns:
        ParsedCodecInfo | None: Codec info of the first default rendition's first playlist, or None.
    """
    if not manifest or not audio_group_id:
        return None

    audio_groups = (manifest.get("mediaGroups") or {}).get("AUDIO")
    if not audio_groups:
        return None

    audio_group = audio_groups.get(audio_group_id)
    if not audio_group:
        return None

    for rendition in audio_group.values():
        if rendition.get("default") and rendition.get("playlists"):
            # codec should be the same for all playlists within the rendition
            attributes = rendition["playlists"][0].get("attributes") or {}
            return parse_codecs(attributes.get("CODECS") or "")

    logger.debug(f"No default rendition in audio group {audio_group_id!r}")
    return None


def get_mime_descriptor(codec_string: Any) -> Optional[MimeDescriptor]:
    """
    Resolves the media type and container for a codec string.

    The media type is ``audio`` only when the string holds exactly one codec and
    that codec is an audio codec. The container is the first of mp4, webm and
    ogg that can hold every codec, falling back to mp4.
    """
    if not codec_string or not isinstance(codec_string, str):
        return None

    codecs = [translate_legacy_codec(codec.strip()) for codec in codec_string.lower().split(",")]

    media_type = DEFAULT_MEDIA_TYPE
    if len(codecs) == 1 and is_audio_codec(codecs[0]):
        media_type = "audio"

    container = DEFAULT_CONTAINER
    for name, pattern in CONTAINER_PATTERNS:
        # every codec must be able to go into the container
        if all(pattern.match(codec) for codec in codecs):
            container = name
            break

    return MimeDescriptor(media_type=media_type, container=container, codecs=codec_string)


def get_mime_for_codec(codec_string: Any) -> Optional[str]:
    """Returns the ``<type>/<container>;codecs="<codec_string>"`` MIME string, or None."""
    descriptor = get_mime_descriptor(codec_string)
    return descriptor.mime if descriptor else None


def browser_supports_codec(
    codec_string: str = "", is_type_supported: Optional[Callable[[str], bool]] = None
) -> bool:
    """
    Check if the client platform can decode a codec string.

    Args:
        codec_string (str): The codec string to check.
        is_type_supported (Callable[[str], bool], optional): The platform's MIME capability predicate.

    Returns:
        bool: False when the predicate is missing or no MIME type can be resolved.
    """
    if is_type_supported is None:
        return False

    mime = get_mime_for_codec(codec_string)
    if mime is None:
        return False

    return bool(is_type_supported(mime))


def muxer_supports_codec(codec_string: str = "") -> bool:
    """Check if every codec in the string can be remuxed without transcoding."""
    return all(
        any(pattern.match(codec.strip()) for _, pattern in MUXER_PATTERNS)
        for codec in (codec_string or "").lower().split(",")
    )
