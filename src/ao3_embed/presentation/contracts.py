"""Request and response models for the embed descriptor endpoint."""

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

# Pen, books and clock; unfurlers show this line as the "author"
_SUMMARY_FORMAT = "{words} \u270f\ufe0f {chapters} / {total} \U0001f4da {date} \U0001f552"


def encode_segment(value: object) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(str(value), safe="")


class EmbedRequest(BaseModel):
    """The compact subset of a work carried in the embed descriptor URL."""

    id: str
    author: str
    words: int = Field(..., ge=0)
    chapters: int = Field(..., ge=0)
    total_chapters: str
    date: str

    def to_path(self) -> str:
        segments = (
            self.id,
            self.author,
            self.words,
            self.chapters,
            self.total_chapters,
            self.date,
        )
        return "/oembed/" + "/".join(encode_segment(s) for s in segments)


class EmbedResponse(BaseModel):
    """oEmbed "rich" descriptor."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.0"
    embed_type: str = Field(default="rich", alias="type")
    author_name: str
    author_url: str
    provider_name: str
    provider_url: str

    @classmethod
    def from_request(cls, request: EmbedRequest, origin_url: str) -> "EmbedResponse":
        return cls(
            author_name=_SUMMARY_FORMAT.format(
                words=request.words,
                chapters=request.chapters,
                total=request.total_chapters,
                date=request.date,
            ),
            author_url=f"{origin_url}/works/{encode_segment(request.id)}",
            provider_name=request.author,
            provider_url=f"{origin_url}/users/{encode_segment(request.author)}",
        )
