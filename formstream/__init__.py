from formstream.builder import MultipartStreamBuilder, Part
from formstream.errors import FormstreamError, InvalidInputError
from formstream.headers import PartHeaders
from formstream.mimetype import CustomMimetypeResolver, MimetypeResolver
from formstream.multipart import build_multipart
from formstream.streams import LegacyStreamFactory, Stream, StreamFactory

__all__ = [
    "MultipartStreamBuilder",
    "Part",
    "PartHeaders",
    "MimetypeResolver",
    "CustomMimetypeResolver",
    "Stream",
    "StreamFactory",
    "LegacyStreamFactory",
    "FormstreamError",
    "InvalidInputError",
    "build_multipart",
]
