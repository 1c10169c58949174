import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

from codecflow.schemas import ParsedCodecInfo
from codecflow.utils.codec_utils import codecs_from_default, is_audio_codec, parse_codecs

logger = logging.getLogger(__name__)

# Captures attributes like BANDWIDTH=1280000 and CODECS="avc1.4d401f,mp4a.40.2"
ATTRIBUTE_PATTERN = re.compile(r'([A-Z0-9-]+)=("([^"]*)"|([^,]+))')


def parse_attribute_list(attributes_str: str) -> Dict[str, Any]:
    """
    Parses an HLS attribute list into a dictionary keyed by attribute name.

    BANDWIDTH values are converted to int and RESOLUTION values to a (width, height) tuple.
    """
    attributes = {}
    for key, _, quoted_val, unquoted_val in ATTRIBUTE_PATTERN.findall(attributes_str):
        value = quoted_val if quoted_val else unquoted_val
        if key in ("BANDWIDTH", "AVERAGE-BANDWIDTH"):
            try:
                attributes[key] = int(value)
            except ValueError:
                logger.warning(f"Invalid {key} value: {value}")
        elif key == "RESOLUTION":
            try:
                width, height = map(int, value.split("x"))
                attributes[key] = (width, height)
            except ValueError:
                attributes[key] = (0, 0)
        else:
            attributes[key] = value
    return attributes


def _resolve(uri: Optional[str], base_url: Optional[str]) -> Optional[str]:
    if uri and base_url:
        return urljoin(base_url, uri)
    return uri


def parse_hls_master_playlist(playlist_content: str, base_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Parses an HLS master playlist into a manifest dictionary.

    Args:
        playlist_content (str): The content of the M3U8 master playlist.
        base_url (str, optional): The base URL of the playlist for resolving relative URIs. Defaults to None.

    Returns:
        Dict[str, Any]: The manifest, with the variant streams under ``playlists`` and the
        alternate audio renditions under ``mediaGroups.AUDIO.<group>.<name>``.
    """
    playlists: List[Dict[str, Any]] = []
    audio_groups: Dict[str, Dict[str, Any]] = {}
    lines = playlist_content.strip().splitlines()

    for i, line in enumerate(lines):
        line = line.strip()
        if line.startswith("#EXT-X-MEDIA:"):
            attributes = parse_attribute_list(line.split(":", 1)[1])
            if attributes.get("TYPE") != "AUDIO":
                continue

            group_id = attributes.get("GROUP-ID")
            name = attributes.get("NAME")
            if not group_id or not name:
                logger.warning(f"Skipping audio rendition without GROUP-ID or NAME: {line}")
                continue

            audio_groups.setdefault(group_id, {})[name] = {
                "default": attributes.get("DEFAULT") == "YES",
                "autoselect": attributes.get("AUTOSELECT") == "YES",
                "language": attributes.get("LANGUAGE"),
                "uri": _resolve(attributes.get("URI"), base_url),
                "playlists": [],
            }

        elif line.startswith("#EXT-X-STREAM-INF:"):
            attributes = parse_attribute_list(line.split(":", 1)[1])

            # The next line should be the stream URL
            next_line = lines[i + 1].strip() if i + 1 < len(lines) else ""
            if next_line and not next_line.startswith("#"):
                playlists.append({"uri": _resolve(next_line, base_url), "attributes": attributes})
            else:
                logger.warning(f"No URI found after #EXT-X-STREAM-INF line: {line}")

    # Audio renditions declare no CODECS; borrow the audio codecs of the first variant using the group
    for group_id, renditions in audio_groups.items():
        audio_codecs = _audio_codecs_for_group(playlists, group_id)
        if not audio_codecs:
            continue
        for rendition in renditions.values():
            rendition["playlists"] = [{"uri": rendition["uri"], "attributes": {"CODECS": audio_codecs}}]

    return {"playlists": playlists, "mediaGroups": {"AUDIO": audio_groups}}


def _audio_codecs_for_group(playlists: List[Dict[str, Any]], group_id: str) -> Optional[str]:
    for playlist in playlists:
        attributes = playlist["attributes"]
        if attributes.get("AUDIO") != group_id or not attributes.get("CODECS"):
            continue
        audio_codecs = [codec.strip() for codec in attributes["CODECS"].split(",") if is_audio_codec(codec)]
        if audio_codecs:
            return ",".join(audio_codecs)
    return None


def codecs_for_variant(manifest: Dict[str, Any], variant: Dict[str, Any]) -> ParsedCodecInfo:
    """
    Returns the codec info of a variant stream.

    When the variant declares no audio codec, the audio codec of the default
    rendition of its audio group is used instead.
    """
    attributes = variant.get("attributes") or {}
    parsed = parse_codecs(attributes.get("CODECS") or "")

    if parsed.audio is None and attributes.get("AUDIO"):
        default_codecs = codecs_from_default(manifest, attributes["AUDIO"])
        if default_codecs is not None and default_codecs.audio is not None:
            parsed.audio = default_codecs.audio

    return parsed
