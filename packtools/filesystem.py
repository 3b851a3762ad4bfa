"""File and directory copying, and a directory walk that follows symlinks."""

from __future__ import annotations

import errno
import os
import shutil
import stat
from collections.abc import Iterator

from packtools.log import Logger

__all__ = ["copy_file", "copy_dir", "maybe_create_destination_dir", "walk"]


def copy_file(source_path: str, destination_path: str, logger: Logger) -> None:
    """Copy a file's contents and permission bits to a new path."""
    try:
        source = open(source_path, "rb")
    except OSError as exc:
        logger.debug(f"error opening source file: {exc}")
        raise
    with source:
        try:
            destination = open(destination_path, "wb")
        except OSError as exc:
            logger.debug(f"error opening destination file: {exc}")
            raise
        with destination:
            try:
                shutil.copyfileobj(source, destination)
            except OSError as exc:
                logger.debug(f"error copying file: {exc}")
                raise
            try:
                destination.flush()
                os.fsync(destination.fileno())
            except OSError as exc:
                logger.debug(f"error syncing destination file: {exc}")
                raise

    try:
        source_info = os.stat(source_path)
    except OSError as exc:
        logger.debug(f"error getting source file info: {exc}")
        raise
    try:
        os.chmod(destination_path, stat.S_IMODE(source_info.st_mode))
    except OSError as exc:
        logger.debug(f"error getting setting destination file permissions: {exc}")
        raise


def copy_dir(
    source_dir: str, destination_dir: str, overwrite: bool, logger: Logger
) -> None:
    """Recursively copy a directory, skipping symlinked files.

    Without overwrite the destination must not exist and is created with the
    source's permissions.
    """
    source_dir = os.path.normpath(source_dir)
    destination_dir = os.path.normpath(destination_dir)

    try:
        source_info = os.stat(source_dir)
    except OSError as exc:
        logger.debug(f"error getting source directory info: {exc}")
        raise
    if not stat.S_ISDIR(source_info.st_mode):
        message = "source is not a directory"
        logger.debug(message)
        raise NotADirectoryError(message)

    try:
        os.stat(destination_dir)
        destination_exists = True
    except FileNotFoundError:
        destination_exists = False
    except OSError as exc:
        logger.debug(f"error getting destination file info: {exc}")
        raise

    if not overwrite:
        if destination_exists:
            message = "destination already exists"
            logger.debug(message)
            raise FileExistsError(message)
        try:
            maybe_create_destination_dir(
                destination_dir,
                mode=stat.S_IMODE(source_info.st_mode),
                err_on_exists=True,
            )
        except OSError as exc:
            logger.debug(f"error creating destination directory: {exc}")
            raise

    try:
        entries = sorted(os.scandir(source_dir), key=lambda entry: entry.name)
    except OSError as exc:
        logger.debug(f"error reading source directory entries: {exc}")
        raise

    for entry in entries:
        source_path = os.path.join(source_dir, entry.name)
        destination_path = os.path.join(destination_dir, entry.name)
        if entry.is_dir(follow_symlinks=False):
            copy_dir(source_path, destination_path, overwrite, logger)
        elif entry.is_symlink():
            continue
        else:
            copy_file(source_path, destination_path, logger)


def maybe_create_destination_dir(
    path: str, *, mode: int = 0o755, err_on_exists: bool = False
) -> None:
    """Create a directory and its parents if it does not exist yet."""
    try:
        os.stat(path)
    except FileNotFoundError:
        os.makedirs(path, mode)
        return
    except OSError:
        return
    if err_on_exists:
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), path)


def walk(root: str) -> Iterator[tuple[str, os.stat_result]]:
    """Yield (path, info) for root and everything below it in sorted order.

    Symlinks are resolved: a link to a directory is walked under the link's
    own path, and info describes the link's target.
    """
    info = os.lstat(root)
    yield from _symwalk(root, info)


def _symwalk(path: str, info: os.stat_result) -> Iterator[tuple[str, os.stat_result]]:
    if stat.S_ISLNK(info.st_mode):
        try:
            resolved = os.path.realpath(path, strict=True)
        except OSError as exc:
            raise OSError(f"error evaluating symlink: {exc}") from exc
        yield from _symwalk(path, os.lstat(resolved))
        return

    yield path, info
    if not stat.S_ISDIR(info.st_mode):
        return

    for name in sorted(os.listdir(path)):
        filename = os.path.join(path, name)
        yield from _symwalk(filename, os.lstat(filename))