"""Transpiler entry points: AST, source text or file → generated Python."""

from pathlib import Path

from ..core.config import Policy, Settings, get_settings
from ..core.logging_config import LogContext, get_logger
from ..lang import AutoError, Code, is_widget_type, parse
from .errors import GenerationError, GenerationErrorKind
from .extractor import extract_widget
from .generator import HEADER, emit_widget
from .model import GeneratedSource
from .sink import CodeSink
from .typemap import TypeMap

logger = get_logger(__name__)


def transpile_ast(
    code: Code,
    *,
    type_map: TypeMap | None = None,
    policy: Policy | None = None,
    settings: Settings | None = None,
) -> GeneratedSource:
    """
    Generate one Python unit containing every widget declared in `code`.

    A unit with a single widget names its message enum ``Msg``; with several
    widgets each enum is prefixed with its widget name (``CounterMsg``).

    Raises:
        GenerationError: No widget declarations, or a widget cannot be emitted
    """
    settings = settings or get_settings()
    decls = [decl for decl in code.types() if is_widget_type(decl)]
    if not decls:
        raise GenerationError(
            GenerationErrorKind.CODEGEN, "No widget declarations found", file=code.file
        )

    infos = [extract_widget(decl, policy=policy, file=code.file) for decl in decls]
    header = [HEADER] if code.file is None else [HEADER, f"# Source: {Path(code.file).name}"]
    sink = CodeSink(indent_width=settings.indent_width, header=header)
    type_map = type_map or TypeMap()

    variants: dict[str, list[str]] = {}
    for info in infos:
        msg_name = "Msg" if len(infos) == 1 else f"{info.name}Msg"
        variants[info.name] = emit_widget(info, sink, type_map=type_map, msg_name=msg_name)
        sink.blank(2)

    text = sink.done()
    logger.info("transpiled", file=code.file, widgets=list(variants))
    return GeneratedSource(text=text, widgets=list(variants), variants=variants)


def transpile_source(
    source: str,
    file: str | None = None,
    *,
    type_map: TypeMap | None = None,
    policy: Policy | None = None,
    settings: Settings | None = None,
) -> GeneratedSource:
    """Parse `source` and transpile it; parse failures become GenerationError(parse)."""
    try:
        code = parse(source, file)
    except AutoError as e:
        logger.warning("parse_failed", file=file, error=str(e))
        raise GenerationError.from_auto_error(e, file) from e
    return transpile_ast(code, type_map=type_map, policy=policy, settings=settings)


def transpile_file(
    path: str | Path,
    output: str | Path | bool | None = None,
    *,
    type_map: TypeMap | None = None,
    policy: Policy | None = None,
    settings: Settings | None = None,
) -> GeneratedSource:
    """
    Transpile a `.at` file.

    Args:
        path: Source file
        output: None to only return the result, True to write a sibling file
            with ``Settings.output_suffix``, or an explicit output path
        type_map: Field type mapping
        policy: Extractor fallback policy
        settings: Settings override

    Returns:
        Generated source

    Raises:
        GenerationError: Reading, parsing, generating or writing failed
    """
    settings = settings or get_settings()
    path = Path(path)

    with LogContext(source=str(path)):
        try:
            size = path.stat().st_size
            if size > settings.max_source_size:
                raise GenerationError(
                    GenerationErrorKind.IO,
                    f"Source is {size} bytes, limit is {settings.max_source_size}",
                    file=str(path),
                )
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise GenerationError(GenerationErrorKind.IO, str(e), file=str(path)) from e

        result = transpile_source(
            source, str(path), type_map=type_map, policy=policy, settings=settings
        )

        if output:
            target = path.with_suffix(settings.output_suffix) if output is True else Path(output)
            try:
                target.write_text(result.text, encoding="utf-8")
            except OSError as e:
                raise GenerationError(GenerationErrorKind.IO, str(e), file=str(target)) from e
            logger.info("output_written", path=str(target), bytes=len(result.text))

        return result
