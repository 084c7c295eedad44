"""Image loading: single reads, folder loads and a ring buffer fed by loader threads."""

from __future__ import annotations

import csv
import io
import sys
import threading
import time
from pathlib import Path

import numpy as np
from PIL import Image

from poseview.recording import TextLogLevel
from poseview.visual_log import log_stream_and_clear

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".bmp", ".gif"})
_CSV_HEADER = ("path_name", "path_idx", "tail_idx", "loaded_count")


class ImageBufferError(Exception):
    """Raised for invalid image directories and reads from an empty buffer."""


def is_image_file(img_path):
    """Return True if the path has a known image extension (case-insensitive)."""
    return Path(img_path).suffix.lower() in IMAGE_EXTENSIONS


def read_image(img_path, grayscale=False):
    """Read an image as a uint8 array: HxW if grayscale, else HxWx3 in BGR order.

    Raises OSError if the file cannot be read as an image.
    """
    with Image.open(img_path) as pil:
        if grayscale:
            return np.asarray(pil.convert("L")).copy()
        rgb = np.asarray(pil.convert("RGB"))
    return np.ascontiguousarray(rgb[:, :, ::-1])


def load_saved_images(rr_path, img_path, rec):
    """Load one image file (grayscale) or every image in a folder (colour, by name).

    Problems and the final count are logged under rr_path/load_saved_images.
    Returns the list of loaded images.
    """
    log_path = f"{rr_path}/load_saved_images"
    path = Path(img_path)
    buffer = io.StringIO()
    images = []
    if path.is_file():
        if is_image_file(path):
            images.append(read_image(path, grayscale=True))
        else:
            buffer.write(f'File is not recognized as an image: "{path}"')
            log_stream_and_clear(log_path, buffer, rec, TextLogLevel.ERROR)
    elif path.is_dir():
        entries = sorted(
            (entry for entry in path.iterdir() if entry.is_file() and is_image_file(entry)),
            key=lambda entry: entry.name,
        )
        images.extend(read_image(entry) for entry in entries)
    else:
        buffer.write(f'Path is neither a file nor a directory: "{path}"')
        log_stream_and_clear(log_path, buffer, rec, TextLogLevel.ERROR)

    buffer.write(f'Loaded {len(images)} images from "{path}"')
    log_stream_and_clear(log_path, buffer, rec)
    return images


def _read_or_none(image_path):
    try:
        return read_image(image_path)
    except OSError as exc:
        print(f"WARN: could not read image {image_path}: {exc}", file=sys.stderr)
        return None


class ImageBuffer:
    """A ring buffer of PNG images from a directory, refilled by loader threads.

    Loaders take turns: only the loader whose index matches the active index
    fills free slots, and the active index advances on every consumed image.
    Each loader records its reads in loader_<n>.csv inside csv_dir.
    """

    def __init__(self, path, buffer_size=20, n_loaders=1, csv_dir=None):
        if n_loaders < 1:
            raise ValueError(f"at least one loader is needed, got {n_loaders}")
        if buffer_size < 0:
            raise ValueError(f"buffer size must not be negative, got {buffer_size}")
        image_dir = Path(path)
        if not image_dir.is_dir():
            raise ImageBufferError(f"Path is not a directory: {path}")

        self.image_paths = sorted(
            entry for entry in image_dir.iterdir() if entry.is_file() and entry.suffix == ".png"
        )
        if buffer_size > len(self.image_paths):
            buffer_size = len(self.image_paths)
            print(
                "WARN: Specified buffer size larger than number of images.  "
                f"Reducing buffer size to {buffer_size}",
                file=sys.stderr,
            )
        self.buffer_size = buffer_size

        self._images = []
        total_ms = 0
        for image_path in self.image_paths[:buffer_size]:
            start = time.perf_counter()
            self._images.append(_read_or_none(image_path))
            total_ms += int((time.perf_counter() - start) * 1000)
        average = total_ms / buffer_size if buffer_size else float("nan")
        print(f"Avg load time: {average:10.4f}ms")

        self._cond = threading.Condition()
        self._head_idx = 0
        self._tail_idx = 0
        self._path_idx = buffer_size
        self._loaded_count = buffer_size
        self._active_loader = 0
        self._stopping = False
        self.n_loaders = n_loaders

        csv_root = Path.cwd() if csv_dir is None else Path(csv_dir)
        self._threads = [
            threading.Thread(
                target=self._loader,
                args=(idx, csv_root / f"loader_{idx}.csv"),
                name=f"image-loader-{idx}",
                daemon=True,
            )
            for idx in range(n_loaders)
        ]
        for thread in self._threads:
            thread.start()

    @property
    def head_idx(self):
        with self._cond:
            return self._head_idx

    @property
    def tail_idx(self):
        with self._cond:
            return self._tail_idx

    @property
    def path_idx(self):
        with self._cond:
            return self._path_idx

    @property
    def loaded_count(self):
        with self._cond:
            return self._loaded_count

    def _ready(self, loader_idx):
        return self._stopping or (
            self._loaded_count < self.buffer_size and self._active_loader == loader_idx
        )

    def _loader(self, loader_idx, csv_path):
        with open(csv_path, "w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(_CSV_HEADER)
            handle.flush()
            while True:
                with self._cond:
                    self._cond.wait_for(lambda: self._ready(loader_idx))
                    if self._stopping:
                        return
                    tail_idx = self._tail_idx
                    path_idx = self._path_idx
                    loaded = self._loaded_count
                    image_path = self.image_paths[path_idx]
                    self._images[tail_idx] = _read_or_none(image_path)
                    self._path_idx = (path_idx + 1) % len(self.image_paths)
                    self._tail_idx = (tail_idx + 1) % self.buffer_size
                    self._loaded_count += 1
                    self._cond.notify_all()
                writer.writerow([str(image_path), path_idx, tail_idx, loaded])
                handle.flush()

    def next_image(self):
        """Return a copy of the image at the buffer head."""
        with self._cond:
            if self._loaded_count == 0:
                raise ImageBufferError("Attempt to get image from empty buffer")
            head_idx = self._head_idx
            image = self._images[head_idx]
        if image is None:
            raise ImageBufferError(f"Image in buffer slot {head_idx} could not be read")
        return image.copy()

    def consume_image(self):
        """Free the slot at the buffer head and hand the turn to the next loader."""
        with self._cond:
            if self._loaded_count == 0:
                raise ImageBufferError("Attempt to get image from empty buffer")
            self._head_idx = (self._head_idx + 1) % self.buffer_size
            self._loaded_count -= 1
            self._active_loader = (self._active_loader + 1) % self.n_loaders
            self._cond.notify_all()

    def shutdown(self):
        """Stop the loader threads and wait for them. Safe to call more than once."""
        with self._cond:
            self._stopping = True
            self._cond.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current and thread.is_alive():
                thread.join()

    def stats(self):
        """Return a short report of the buffer's sizes and indices."""
        with self._cond:
            lines = [
                f"Image buffer size   : {self.buffer_size}",
                f"Image paths count   : {len(self.image_paths)}",
                f"Head index          : {self._head_idx}",
                f"Tail index          : {self._tail_idx}",
                f"Current index       : {self._path_idx}",
                f"Loaded images count : {self._loaded_count}",
            ]
        return "\n".join(lines) + "\n"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.shutdown()