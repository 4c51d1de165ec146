"""Work metadata record."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WorkMetadata:
    """Snapshot of one work's public metadata at extraction time.

    List-valued attributes keep document order and are stored as tuples so
    a cached record can be shared between requests without copying.
    """

    id: int
    title: str
    author: str
    author_url: str
    published_date: str
    words: int
    chapter: int
    total_chapters: int | None = None
    rating: str | None = None
    language: str | None = None
    kudos: int | None = None
    hits: int | None = None
    fandoms: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
    categories: tuple[str, ...] = field(default_factory=tuple)
    relationships: tuple[str, ...] = field(default_factory=tuple)
    characters: tuple[str, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.id < 0:
            msg = f"Work id must be non-negative, got {self.id}"
            raise ValueError(msg)

        for name in ("words", "chapter", "total_chapters", "kudos", "hits"):
            value = getattr(self, name)
            if value is not None and value < 0:
                msg = f"{name} must be non-negative, got {value}"
                raise ValueError(msg)

        if self.total_chapters is not None and self.chapter > self.total_chapters:
            msg = (
                f"chapter {self.chapter} exceeds total chapters "
                f"{self.total_chapters}"
            )
            raise ValueError(msg)

    @property
    def is_complete(self) -> bool:
        return self.total_chapters is not None and self.chapter == self.total_chapters
