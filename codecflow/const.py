import re

DEFAULT_AUDIO_CODEC = "mp4a.40.2"  # AAC-LC
DEFAULT_VIDEO_CODEC = "avc1.4d400d"  # H.264 Main profile

# Old apple-style `avc1.<profile>.<level>` with decimal parameters
LEGACY_AVC_PATTERN = re.compile(r"avc1\.(\d+)\.(\d+)", re.IGNORECASE | re.ASCII)

# ────────────────────────────────────────────────────────────────────
# Codec category patterns, evaluated in order (a later match wins)
# ────────────────────────────────────────────────────────────────────
CODEC_CATEGORY_PATTERNS = (
    ("video", re.compile(r"^(av0?1|avc0?[1234]|vp0?[89]|hvc1|hev1|theora|mp4v)")),
    ("audio", re.compile(r"^(mp4a|flac|vorbis|opus|ac-[34]|ec-3|alac|mp3)")),
)

# ────────────────────────────────────────────────────────────────────
# Container patterns, evaluated in order (first full match wins)
# ────────────────────────────────────────────────────────────────────
CONTAINER_PATTERNS = (
    ("mp4", re.compile(r"^(av0?1|avc0?[1234]|vp0?9|flac|opus|mp3|mp4a|mp4v)")),
    ("webm", re.compile(r"^(vp0?[89]|av0?1|opus|vorbis)")),
    ("ogg", re.compile(r"^(vp0?[89]|theora|flac|opus|vorbis)")),
)

DEFAULT_MEDIA_TYPE = "video"
DEFAULT_CONTAINER = "mp4"

# Codecs the fMP4 -> TS remuxer can repackage without transcoding
MUXER_PATTERNS = (
    ("video", re.compile(r"^(avc0?[1234])")),
    ("audio", re.compile(r"^(mp4a)")),
)
