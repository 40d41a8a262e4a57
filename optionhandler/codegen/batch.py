"""
Batch generation of option handler modules.

Each definition is loaded, compiled and written on its own; no state is
shared between definitions. By default the batch stops at the first
failure, ``keep_going`` processes the remaining definitions as well.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..logging_config import get_logger
from ..utils import DefinitionIOError, load_definition
from .core.config import GeneratorConfig
from .core.generator import CodeGenerator, generate_code
from .core.schema import ClassDefinition, SchemaError
from .registry import get_generator

logger = get_logger(__name__)


@dataclass
class BatchOptions:
    """Settings for a batch run."""

    output_dir: Path
    add_package_structure: bool = False
    generate_dirs: bool = False
    keep_going: bool = False
    language: str = "python"
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)


@dataclass
class BatchReport:
    """Outcome of a batch run."""

    written: List[Path] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    skipped: int = 0

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def error_message(self) -> Optional[str]:
        """All error messages, one per line, or None if there were none."""
        if not self.errors:
            return None
        return "\n".join(self.errors)


def output_path(
    definition: ClassDefinition, generator: CodeGenerator, options: BatchOptions
) -> Path:
    """
    Path of the generated module for a definition.

    Args:
        definition: The compiled definition
        generator: Generator that determines the file name
        options: Output directory and package structure switch

    Returns:
        Output directory, plus package directories if requested, plus file name
    """
    path = options.output_dir
    if options.add_package_structure and definition.package:
        path = path.joinpath(*definition.package.split("."))
    return path / generator.module_filename(definition)


def write_output(path: Path, code: str, generate_dirs: bool = False):
    """
    Write generated code to a file.

    Raises:
        DefinitionIOError: If the directory is missing (and may not be
            created) or the file cannot be written
    """
    parent = path.parent
    if not parent.is_dir():
        if not generate_dirs:
            raise DefinitionIOError(f"Output directory does not exist: {parent}")
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DefinitionIOError(f"Failed to create directory {parent}: {e}") from e
        logger.info("Created directory %s", parent)

    try:
        path.write_text(code, encoding="utf-8")
    except OSError as e:
        raise DefinitionIOError(f"Failed to write {path}: {e}") from e
    logger.info("Wrote %s", path)


def generate_batch(
    sources: Iterable[Union[str, Path]],
    options: BatchOptions,
    generator: Optional[CodeGenerator] = None,
) -> BatchReport:
    """
    Generate option handler modules for several definition files.

    Args:
        sources: Definition file paths or URLs, processed in order
        options: Batch settings
        generator: Generator to use, created from options if omitted

    Returns:
        BatchReport with written paths and errors
    """
    sources = list(sources)
    if generator is None:
        generator = get_generator(options.language, options.config)

    report = BatchReport()

    for index, source in enumerate(sources):
        error = _generate_one(source, generator, options, report)
        if error is None:
            continue

        report.errors.append(error)
        if not options.keep_going:
            report.skipped = len(sources) - index - 1
            if report.skipped:
                logger.warning("Stopping after failure, %d definition(s) skipped", report.skipped)
            break

    return report


def _generate_one(
    source: Union[str, Path],
    generator: CodeGenerator,
    options: BatchOptions,
    report: BatchReport,
) -> Optional[str]:
    """Load, compile and write one definition; returns an error message on failure."""
    name = None
    try:
        definition = load_definition(source)
        name = definition.name

        result = generate_code(generator, definition)
        if not result.success:
            return result.error_message

        path = output_path(definition, generator, options)
        write_output(path, result.code, options.generate_dirs)

    except (DefinitionIOError, SchemaError) as e:
        logger.error("Failed to process %s: %s", source, e)
        if name:
            return f"Failed to process {source} ({name}): {e}"
        return f"Failed to process {source}: {e}"

    report.written.append(path)
    report.warnings.extend(f"{source}: {warning}" for warning in result.warnings)
    return None
