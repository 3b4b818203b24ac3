"""Awaitable filesystem helpers.

Each coroutine runs one blocking call in a worker thread and propagates the
platform exception unchanged. There is no shared state between calls.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from functools import partial
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from anyio import to_thread

from .normalize import decode_text, format_records, format_rows, parse_csv, parse_records
from .rules import DEFAULT_DELIMITER, JSON_SEPARATORS, ROW_SEPARATOR, TEXT_ENCODING

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def path(*segments: PathLike) -> str:
    """Join every segment and collapse ``.`` and ``..``.

    Unlike ``os.path.join`` an absolute segment does not discard what came
    before it: ``path("/folder1", "./../folder2", "file.ext")`` is
    ``"/folder2/file.ext"``.
    """
    parts = [p for p in (os.fspath(s) for s in segments) if p]
    if not parts:
        return "."
    head, rest = parts[0].rstrip(os.sep), [p.strip(os.sep) for p in parts[1:]]
    return os.path.normpath(os.sep.join([head, *rest]) or os.sep)


def _touch(target: str) -> None:
    Path(target).parent.mkdir(parents=True, exist_ok=True)
    Path(target).touch(exist_ok=True)


def _merge(src: str, dest: str) -> None:
    for name in os.listdir(src):
        source = os.path.join(src, name)
        target = os.path.join(dest, name)
        if os.path.isdir(target) and os.path.isdir(source) and not os.path.islink(source):
            _merge(source, target)
        elif os.path.lexists(target):
            os.replace(source, target)
        else:
            shutil.move(source, target)
    os.rmdir(src)


def _mv(src: str, dest: str) -> None:
    if os.path.isdir(src) and os.path.isdir(dest):
        _merge(src, dest)
    else:
        shutil.move(src, dest)


def _rmrf(target: str) -> None:
    if os.path.isdir(target) and not os.path.islink(target):
        shutil.rmtree(target)
    else:
        os.remove(target)


def _cp(src: str, dest: str) -> None:
    if os.path.isdir(src):
        shutil.copytree(src, dest, dirs_exist_ok=True)
    else:
        shutil.copy2(src, dest)


def _read_bytes(target: str) -> bytes:
    return Path(target).read_bytes()


def _write(content: str, target: str, mode: str) -> None:
    Path(target).parent.mkdir(parents=True, exist_ok=True)
    with open(target, mode, encoding=TEXT_ENCODING, newline="") as handle:
        handle.write(content)


def _ends_without_newline(target: str) -> bool:
    """True when ``target`` exists, is non-empty and its last byte is not a newline."""
    try:
        with open(target, "rb") as handle:
            handle.seek(0, os.SEEK_END)
            if handle.tell() == 0:
                return False
            handle.seek(-1, os.SEEK_END)
            return handle.read(1) != ROW_SEPARATOR.encode(TEXT_ENCODING)
    except FileNotFoundError:
        return False


def _readdir(directory: str) -> List[str]:
    with os.scandir(directory) as entries:
        return sorted(entry.name for entry in entries if entry.is_file())


async def touch(directory: PathLike, filename: PathLike) -> None:
    target = path(directory, filename)
    logger.debug("touch %s", target)
    await to_thread.run_sync(_touch, target)


async def mv(src: PathLike, dest: PathLike) -> None:
    logger.debug("mv %s -> %s", src, dest)
    await to_thread.run_sync(_mv, os.fspath(src), os.fspath(dest))


async def rename(src: PathLike, dest: PathLike) -> None:
    logger.debug("rename %s -> %s", src, dest)
    await to_thread.run_sync(os.replace, os.fspath(src), os.fspath(dest))


async def rmrf(target: PathLike) -> None:
    """Delete ``target`` recursively. A missing target raises FileNotFoundError."""
    logger.debug("rmrf %s", target)
    await to_thread.run_sync(_rmrf, os.fspath(target))


async def cp(src: PathLike, dest: PathLike) -> None:
    logger.debug("cp %s -> %s", src, dest)
    await to_thread.run_sync(_cp, os.fspath(src), os.fspath(dest))


async def read(directory: PathLike, filename: PathLike, encoding: Optional[str] = None) -> str:
    target = path(directory, filename)
    raw = await to_thread.run_sync(_read_bytes, target)
    logger.debug("read %s (%d bytes)", target, len(raw))
    return decode_text(raw, encoding)


async def write(content: str, directory: PathLike, filename: PathLike) -> None:
    target = path(directory, filename)
    logger.debug("write %s (%d chars)", target, len(content))
    await to_thread.run_sync(_write, content, target, "w")


async def append(content: str, directory: PathLike, filename: PathLike) -> None:
    target = path(directory, filename)
    logger.debug("append %s (%d chars)", target, len(content))
    await to_thread.run_sync(_write, content, target, "a")


async def readdir(directory: PathLike) -> List[str]:
    """Names of the regular files in ``directory``; subdirectories are skipped."""
    return await to_thread.run_sync(_readdir, os.fspath(directory))


async def mkdir(target: PathLike) -> None:
    logger.debug("mkdir %s", target)
    await to_thread.run_sync(partial(os.makedirs, os.fspath(target), exist_ok=True))


async def stat(target: PathLike) -> os.stat_result:
    return await to_thread.run_sync(os.stat, os.fspath(target))


async def read_json(directory: PathLike, filename: PathLike) -> Any:
    return json.loads(await read(directory, filename))


async def write_json(obj: Any, directory: PathLike, filename: PathLike) -> None:
    content = json.dumps(obj, separators=JSON_SEPARATORS, ensure_ascii=False)
    await write(content, directory, filename)


async def read_csv(
    directory: PathLike,
    filename: PathLike,
    has_header: bool = True,
    delimiter: str = DEFAULT_DELIMITER,
) -> List[List[str]]:
    """Rows of a delimited file; the header row is dropped when ``has_header``."""
    return parse_csv(await read(directory, filename), has_header, delimiter)


async def write_csv(
    rows: Sequence[Sequence[Any]],
    header: Optional[Sequence[Any]],
    directory: PathLike,
    filename: PathLike,
    delimiter: str = DEFAULT_DELIMITER,
) -> None:
    await write(format_rows(rows, header, delimiter), directory, filename)


async def append_csv(
    rows: Sequence[Sequence[Any]],
    directory: PathLike,
    filename: PathLike,
    delimiter: str = DEFAULT_DELIMITER,
) -> None:
    """Append rows after the existing content. The header is never re-emitted."""
    target = path(directory, filename)
    content = format_rows(rows, delimiter=delimiter)
    if await to_thread.run_sync(_ends_without_newline, target):
        content = ROW_SEPARATOR + content
    await append(content, directory, filename)


async def csv_to_obj(
    directory: PathLike,
    filename: PathLike,
    delimiter: str = DEFAULT_DELIMITER,
) -> List[Dict[str, str]]:
    return parse_records(await read(directory, filename), delimiter)


async def obj_to_csv(
    records: Sequence[Mapping[str, Any]],
    directory: PathLike,
    filename: PathLike,
    delimiter: str = DEFAULT_DELIMITER,
) -> None:
    await write(format_records(records, delimiter), directory, filename)
