"""Content blocks stored in the ``content`` column of projects, articles and news.

Each block type has its own pydantic model and its own metadata model, so the
metadata of a heading can only hold heading options. Stored JSON keeps the
camelCase metadata keys written by the block editor (``listType``,
``calloutType`` ...).
"""
from __future__ import annotations

import logging
from typing import Annotated, Any, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel


logger = logging.getLogger(__name__)

BLOCK_TYPES = (
    "paragraph",
    "heading",
    "image",
    "quote",
    "list",
    "code",
    "gallery",
    "video",
    "spacer",
    "accordion",
    "callout",
    "divider",
    "file",
)


class BlockMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class ParagraphMeta(BlockMeta):
    is_drop_cap: Optional[bool] = None


class HeadingMeta(BlockMeta):
    level: int = 2

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, value: Any) -> int:
        try:
            level = int(value or 2)
        except (TypeError, ValueError):
            return 2
        return min(max(level, 1), 6)


class ImageMeta(BlockMeta):
    alt: str = ""
    caption: str = ""
    align: str = "full"
    size: str = "full"


class QuoteMeta(BlockMeta):
    author: str = ""


class ListMeta(BlockMeta):
    list_type: str = "bullet"
    ordered: Optional[bool] = None
    items: Optional[List[str]] = None


class CodeMeta(BlockMeta):
    language: str = "text"


class GalleryImage(BlockMeta):
    url: str
    caption: str = ""
    alt: str = ""


class GalleryMeta(BlockMeta):
    images: List[GalleryImage] = Field(default_factory=list)
    gallery_style: str = "grid"
    enable_download: bool = False


class VideoMeta(BlockMeta):
    video_type: str = "youtube"
    caption: str = ""


class SpacerMeta(BlockMeta):
    height: str = "medium"


class AccordionItem(BlockMeta):
    question: str = ""
    answer: str = ""


class AccordionMeta(BlockMeta):
    items: List[AccordionItem] = Field(default_factory=list)


class CalloutMeta(BlockMeta):
    callout_type: str = "info"


class DividerMeta(BlockMeta):
    pass


class FileMeta(BlockMeta):
    file_name: Optional[str] = None
    file_size: Optional[str] = None


class BaseBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    content: str = ""

    @field_validator("id", "content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("metadata", mode="before", check_fields=False)
    @classmethod
    def _none_to_defaults(cls, value: Any) -> Any:
        return {} if value is None else value


class ParagraphBlock(BaseBlock):
    type: Literal["paragraph"]
    metadata: ParagraphMeta = Field(default_factory=ParagraphMeta)


class HeadingBlock(BaseBlock):
    type: Literal["heading"]
    metadata: HeadingMeta = Field(default_factory=HeadingMeta)


class ImageBlock(BaseBlock):
    type: Literal["image"]
    metadata: ImageMeta = Field(default_factory=ImageMeta)


class QuoteBlock(BaseBlock):
    type: Literal["quote"]
    metadata: QuoteMeta = Field(default_factory=QuoteMeta)


class ListBlock(BaseBlock):
    type: Literal["list"]
    metadata: ListMeta = Field(default_factory=ListMeta)

    @property
    def numbered(self) -> bool:
        return self.metadata.list_type == "numbered" or bool(self.metadata.ordered)

    @property
    def items(self) -> List[str]:
        listed = [item for item in self.metadata.items or [] if item.strip()]
        if listed:
            return listed
        return [line for line in self.content.split("\n") if line.strip()]


class CodeBlock(BaseBlock):
    type: Literal["code"]
    metadata: CodeMeta = Field(default_factory=CodeMeta)


class GalleryBlock(BaseBlock):
    type: Literal["gallery"]
    metadata: GalleryMeta = Field(default_factory=GalleryMeta)


class VideoBlock(BaseBlock):
    type: Literal["video"]
    metadata: VideoMeta = Field(default_factory=VideoMeta)


class SpacerBlock(BaseBlock):
    type: Literal["spacer"]
    metadata: SpacerMeta = Field(default_factory=SpacerMeta)


class AccordionBlock(BaseBlock):
    type: Literal["accordion"]
    metadata: AccordionMeta = Field(default_factory=AccordionMeta)


class CalloutBlock(BaseBlock):
    type: Literal["callout"]
    metadata: CalloutMeta = Field(default_factory=CalloutMeta)


class DividerBlock(BaseBlock):
    type: Literal["divider"]
    metadata: DividerMeta = Field(default_factory=DividerMeta)


class FileBlock(BaseBlock):
    type: Literal["file"]
    metadata: FileMeta = Field(default_factory=FileMeta)


Block = Annotated[
    Union[
        ParagraphBlock,
        HeadingBlock,
        ImageBlock,
        QuoteBlock,
        ListBlock,
        CodeBlock,
        GalleryBlock,
        VideoBlock,
        SpacerBlock,
        AccordionBlock,
        CalloutBlock,
        DividerBlock,
        FileBlock,
    ],
    Field(discriminator="type"),
]

_block_adapter: TypeAdapter = TypeAdapter(Block)


def parse_block(raw: Any) -> Optional[BaseBlock]:
    """Validate one stored block; unknown types and bad metadata give None."""
    if isinstance(raw, BaseBlock):
        return raw
    if not isinstance(raw, dict):
        logger.debug("skip block: not a mapping (%s)", type(raw).__name__)
        return None
    if raw.get("type") not in BLOCK_TYPES:
        logger.debug("skip block: unknown type %r", raw.get("type"))
        return None
    try:
        return _block_adapter.validate_python(raw)
    except ValidationError as exc:
        logger.debug("skip block %s: %s", raw.get("id"), exc.errors()[:1])
        return None


def parse_blocks(raw_list: Optional[Iterable[Any]]) -> List[BaseBlock]:
    if not raw_list or isinstance(raw_list, (str, bytes)):
        return []
    blocks: List[BaseBlock] = []
    for raw in raw_list:
        block = parse_block(raw)
        if block is not None:
            blocks.append(block)
    return blocks


def dump_block(block: BaseBlock) -> dict:
    return block.model_dump(by_alias=True, exclude_none=True)


def dump_blocks(blocks: Iterable[Any]) -> List[dict]:
    return [dump_block(block) for block in parse_blocks(blocks)]


def is_block_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, (dict, BaseBlock)) for item in value)
