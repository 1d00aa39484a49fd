# carsdb/fetch.py
"""Raw dataset retrieval: download the published archive and unpack the CSV.

The target file is only ever replaced by a complete copy whose header names
every consumed column, so a failed or garbled download leaves the previous
file (and the snapshot built from it) intact.
"""
import os
import shutil
import tempfile
import zipfile
import requests
from .parsing import parse_header
from .services import DatasetError
from .utils import logger, retry

CHUNK_SIZE = 1 << 16


@retry(requests.RequestException, tries=3, delay=2, backoff=2)
def download(url, dest, timeout=120):
    with requests.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        with open(dest, "wb") as fh:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                fh.write(chunk)
    return dest


def max_fetch_duration(timeout):
    """Upper bound in seconds of one `update_dataset` call that keeps failing."""
    return timeout * download.tries + download.total_delay


def _csv_member(archive: zipfile.ZipFile, wanted: str) -> str:
    names = archive.namelist()
    for name in names:
        if os.path.basename(name) == wanted:
            return name
    for name in names:
        if name.lower().endswith(".csv"):
            return name
    raise DatasetError(f"no csv member in archive ({len(names)} entries)")


def check_header(path):
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as fh:
        header = fh.readline()
    fields = parse_header(header)
    if not fields.complete:
        raise DatasetError(f"downloaded dataset has no usable header: {header[:80]!r}")


def unpack(src, target_path):
    """Write the dataset held in `src` (zip archive or bare csv) to `target_path`."""
    target_dir = os.path.dirname(target_path) or "."
    fd, tmp_path = tempfile.mkstemp(dir=target_dir, prefix=".vehicles-", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as out:
            if zipfile.is_zipfile(src):
                with zipfile.ZipFile(src) as archive:
                    member = _csv_member(archive, os.path.basename(target_path))
                    with archive.open(member) as fh:
                        shutil.copyfileobj(fh, out)
            else:
                with open(src, "rb") as fh:
                    shutil.copyfileobj(fh, out)
        check_header(tmp_path)
        os.replace(tmp_path, target_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return target_path


def update_dataset(url, target_path, timeout=120):
    """Fetch `url` and replace the local dataset file at `target_path`."""
    logger.info("Updating cars database from %s, pid %s", url, os.getpid())
    target_dir = os.path.dirname(target_path) or "."
    os.makedirs(target_dir, exist_ok=True)
    fd, archive_path = tempfile.mkstemp(dir=target_dir, prefix=".cars-db-", suffix=".zip")
    os.close(fd)
    try:
        download(url, archive_path, timeout=timeout)
        unpack(archive_path, target_path)
    finally:
        if os.path.exists(archive_path):
            os.remove(archive_path)
    logger.info("Cars database updated: %s", target_path)
    return target_path
