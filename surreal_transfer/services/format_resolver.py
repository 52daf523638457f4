"""Input file set validation and format detection."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from ..models.errors import ValidationError
from ..models.transfer import FileFormat

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def resolve_format(paths: Iterable[PathLike]) -> FileFormat:
    """
    Check that all paths are existing files of one known format.

    Args:
        paths: Input file paths

    Returns:
        The shared FileFormat

    Raises:
        ValidationError: On an empty set, a path that is not a regular
            file, an unknown extension, or mixed extensions
    """
    files: List[Path] = [Path(p) for p in paths]
    if not files:
        raise ValidationError("No input files given")

    for path in files:
        if not path.is_file():
            raise ValidationError(f"{path} is not a file", {"path": str(path)})

    extensions = {path.suffix.lower() for path in files}
    if len(extensions) > 1:
        raise ValidationError(
            f"Not all files are the same type: {', '.join(sorted(extensions))}",
            {"extensions": sorted(extensions)},
        )

    extension = extensions.pop()
    for file_format in FileFormat:
        if file_format.extension == extension:
            logger.debug(f"Resolved {len(files)} file(s) as {file_format.value}")
            return file_format

    raise ValidationError(
        f"{files[0]} is an invalid file type",
        {"path": str(files[0]), "extension": extension},
    )
