"""
Text Formatting Endpoints.

Exposes the Markdown/LaTeX segmentation used to render solver answers, and
the block grouping used for search answers.
"""

from fastapi import APIRouter

from snapsolve.formatting.markdown_blocks import split_blocks
from snapsolve.formatting.tokenizer import BlockMath, group_segments, tokenize_math
from snapsolve.server.schemas import BlockMathRead, FormatRequest, FormatResponse, InlineRunRead, MarkdownBlockRead

router = APIRouter()


@router.post(
    "",
    response_model=FormatResponse,
    summary="Format Text",
    description="Split text into Markdown, inline math and block math segments and group them for layout.",
)
async def format_text(request: FormatRequest) -> FormatResponse:
    segments = tokenize_math(request.text)
    layout = []
    for item in group_segments(segments):
        if isinstance(item, BlockMath):
            layout.append(BlockMathRead(segment=item.segment))
        else:
            layout.append(InlineRunRead(segments=item.segments))
    blocks = [MarkdownBlockRead(kind=b.kind, level=b.level, lines=b.lines) for b in split_blocks(request.text)]
    return FormatResponse(segments=segments, layout=layout, blocks=blocks)
