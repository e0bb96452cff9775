"""Markdown event pipeline: tokenizer, stream filters and HTML writer."""
from redwood.markdown.partition import Part, partition
from redwood.markdown.pipeline import build_pipeline, markdown_to_html
from redwood.markdown.streams import (
    LinkHighlightStream,
    SyntaxHighlightStream,
    TextMergeStream,
    UnknownRefHandlingStream,
    UnknownRefResolver,
    literal_ref_resolver,
)

__all__ = [
    "Part", "partition",
    "build_pipeline", "markdown_to_html",
    "LinkHighlightStream", "SyntaxHighlightStream",
    "TextMergeStream", "UnknownRefHandlingStream",
    "UnknownRefResolver", "literal_ref_resolver",
]
