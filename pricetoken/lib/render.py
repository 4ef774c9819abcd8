"""
Content rendering for price tokens.

This module applies the token engine to authored content on disk.

The module handles:
- Reading the quote record produced by the external price fetch
- Text files, substituted as a whole
- JSON Q&A files, a list of question/answer records substituted per field
- Mirroring an input tree into an output tree

A failure on one file is recorded in its RenderResult and does not stop the
others.
"""

import json
from pathlib import Path
from typing import Any
from pydantic import TypeAdapter, ValidationError
from pricetoken.lib.log import LOG
from pricetoken.lib.parser import quote_coerce
from pricetoken.lib.tokens import ConfigLike, qa_substitute, text_parse, text_listTokens
from pricetoken.models.dataModel import QAItem, Quote, RenderResult

QA_SUFFIX: str = ".json"

qa_adapter: TypeAdapter[list[QAItem]] = TypeAdapter(list[QAItem])


def quote_read(path: Path) -> Quote | None:
    """Read a quote record such as ``{"ask": 30000}`` from a JSON file.

    Args:
        path: Location of the quote file

    Returns:
        The Quote, or None if the file is missing or does not hold a quote
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        LOG(f"Cannot read quote file {path}: {e}")
        return None
    return quote_coerce(data)


def quote_select(ask: float | None = None, path: Path | None = None) -> Quote | None:
    """Pick the quote for a render from command line inputs.

    An explicit ask wins over a quote file; with neither there is no quote
    and every token renders as the fallback phrase.
    """
    if ask is not None:
        return quote_coerce({"ask": ask})
    if path is not None:
        return quote_read(path)
    return None


def file_render(
    source: Path, destination: Path, quote: Any = None, config: ConfigLike = None
) -> RenderResult:
    """Render one content file.

    Args:
        source: Authored file
        destination: Output file; parent directories are created
        quote: Current quote or None
        config: Formatting overrides

    Returns:
        RenderResult describing the outcome
    """
    result: RenderResult = RenderResult(source=source, destination=destination)
    try:
        content: str = source.read_text(encoding="utf-8")
        if source.suffix.lower() == QA_SUFFIX:
            items: list[QAItem] = qa_adapter.validate_json(content)
            result.tokens = sum(
                len(text_listTokens(item.question)) + len(text_listTokens(item.answer))
                for item in items
            )
            rendered: str = qa_adapter.dump_json(
                qa_substitute(items, quote, config), indent=2
            ).decode("utf-8")
        else:
            parsed = text_parse(content, quote, config)
            result.tokens = len(parsed.tokens)
            rendered = parsed.text

        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(rendered, encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        msg: str = f"Error rendering {source}: {e}"
        LOG(msg)
        result.success = False
        result.error = msg
    return result


def files_render(
    inputdir: Path,
    outputdir: Path,
    pattern: str,
    quote: Any = None,
    config: ConfigLike = None,
) -> list[RenderResult]:
    """Render every file under inputdir matching pattern into outputdir.

    Relative paths are preserved, so ``inputdir/faq/home.md`` is written to
    ``outputdir/faq/home.md``.
    """
    results: list[RenderResult] = []
    for source in sorted(inputdir.glob(pattern)):
        if not source.is_file():
            continue
        destination: Path = outputdir / source.relative_to(inputdir)
        results.append(file_render(source, destination, quote, config))

    LOG(
        f"Rendered {sum(r.success for r in results)}/{len(results)} file(s) "
        f"matching {pattern} from {inputdir}"
    )
    return results
