import logging

from fastapi import APIRouter, HTTPException, Query

from codecflow.configs import settings
from codecflow.schemas import (
    MimeDescriptor,
    ParsedCodecInfo,
    PlaylistCodecsRequest,
    PlaylistCodecsResponse,
    SupportsCodecRequest,
    VariantCodecs,
)
from codecflow.utils.codec_utils import (
    browser_supports_codec,
    codecs_from_default,
    get_mime_descriptor,
    get_mime_for_codec,
    muxer_supports_codec,
    parse_codecs,
    translate_legacy_codec,
)
from codecflow.utils.hls_utils import codecs_for_variant, parse_hls_master_playlist

logger = logging.getLogger(__name__)

codecs_router = APIRouter()


@codecs_router.get("/parse", summary="Parse a codec string", response_model=ParsedCodecInfo)
async def parse_codec_string(codecs: str = Query("", description="The comma-separated codec string.")):
    """Classify each codec of the string as video or audio."""
    return parse_codecs(codecs)


@codecs_router.get("/mime", summary="Resolve the MIME type of a codec string", response_model=MimeDescriptor)
async def resolve_mime(codecs: str = Query("", description="The comma-separated codec string.")):
    """Resolve the media type and container for a codec string."""
    descriptor = get_mime_descriptor(codecs)
    if descriptor is None:
        raise HTTPException(status_code=404, detail="No MIME type could be resolved for the codec string")
    return descriptor


@codecs_router.get("/translate", summary="Translate legacy AVC codecs")
async def translate_codecs(codecs: str = Query("", description="The comma-separated codec string.")):
    """Rewrite apple-style `avc1.<dd>.<dd>` codecs to the standard form."""
    return {"codecs": translate_legacy_codec(codecs)}


@codecs_router.get("/muxer", summary="Check if the remuxer supports a codec string")
async def check_muxer_support(codecs: str = Query("", description="The comma-separated codec string.")):
    return {"supported": muxer_supports_codec(codecs)}


@codecs_router.post("/supports", summary="Check if a client platform can decode a codec string")
async def check_platform_support(request: SupportsCodecRequest):
    """
    Check a codec string against the MIME types a client reports as playable.

    A supported type matches either the full MIME string or its `type/container` part.
    """
    supported_types = set(request.supported_types)

    def is_type_supported(mime: str) -> bool:
        return mime in supported_types or mime.split(";", 1)[0] in supported_types

    return {
        "mime": get_mime_for_codec(request.codecs),
        "supported": browser_supports_codec(request.codecs, is_type_supported),
    }


@codecs_router.post(
    "/playlist", summary="Analyze the codecs of an HLS master playlist", response_model=PlaylistCodecsResponse
)
async def analyze_playlist(request: PlaylistCodecsRequest):
    """Report the codecs, MIME type and remuxer support of every variant in a master playlist."""
    manifest = parse_hls_master_playlist(request.content, request.base_url)
    if not manifest["playlists"]:
        raise HTTPException(status_code=400, detail="No variant streams found in the playlist")

    variants = []
    for variant in manifest["playlists"]:
        attributes = variant["attributes"]
        codecs = attributes.get("CODECS")
        if codecs:
            parsed = codecs_for_variant(manifest, variant)
        else:
            codecs = f"{settings.default_video_codec},{settings.default_audio_codec}"
            logger.info(f"Variant {variant['uri']} declares no CODECS, assuming {codecs}")
            parsed = parse_codecs(codecs)

        variants.append(
            VariantCodecs(
                uri=variant["uri"],
                bandwidth=attributes.get("BANDWIDTH"),
                codecs=codecs,
                parsed=parsed,
                mime=get_mime_for_codec(codecs),
                muxer_supported=muxer_supports_codec(codecs),
            )
        )

    audio_group = request.audio_group or next(iter(manifest["mediaGroups"]["AUDIO"]), None)
    return PlaylistCodecsResponse(variants=variants, default_audio=codecs_from_default(manifest, audio_group))
