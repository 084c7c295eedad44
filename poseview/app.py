"""The viewer program: stream a folder of images to a visual log viewer."""

from __future__ import annotations

import itertools
import sys
import time

from poseview.cli import HelpRequested, help_text, parse_args
from poseview.images import ImageBuffer, ImageBufferError
from poseview.recording import ColorModel, RecordingStream
from poseview.visual_log import log_mat_image

IMAGES_PATH = "doom_gif"
BUFFER_SIZE = 20
LOADER_THREADS = 1
WARMUP_SECONDS = 1.0
FRAME_INTERVAL = 0.1


def _image_loop(buf, rec, max_frames):
    print(buf.stats())
    print("Warming up background loader...")
    time.sleep(WARMUP_SECONDS)
    print("Starting image loop...")

    if buf.buffer_size <= 0:
        print("Image buffer has no images", file=sys.stderr)
        return 1

    frames = itertools.count() if max_frames is None else range(max_frames)
    for _ in frames:
        time.sleep(FRAME_INTERVAL)
        try:
            img = buf.next_image()
            log_mat_image("images", img, ColorModel.BGR, rec)
            buf.consume_image()
        except ImageBufferError as exc:
            print(exc, file=sys.stderr)
            return 1
    return 0


def run(cli, max_frames=None):
    """Stream buffered images to the viewer; runs forever unless max_frames is given.

    Returns the process exit status.
    """
    with RecordingStream("mve", enabled=cli.enable_rerun) as rec:
        if cli.enable_rerun:
            try:
                rec.connect_tcp(cli.viewer_addr)
            except (ConnectionError, ValueError):
                print("Failed to spawn Rerun", file=sys.stderr)
                return 1
            print(f"Connected to {cli.viewer_addr}")
        else:
            print("Rerun logging disabled.")

        try:
            buf = ImageBuffer(cli.path or IMAGES_PATH, BUFFER_SIZE, LOADER_THREADS)
        except ImageBufferError as exc:
            print(exc, file=sys.stderr)
            return 1

        try:
            status = _image_loop(buf, rec, max_frames)
        finally:
            buf.shutdown()
        if status == 0:
            print("Shutting down...")
        return status


def main(argv=None):
    """Command entry point."""
    try:
        cli = parse_args(argv)
    except HelpRequested:
        print(help_text(), end="")
        return 0
    try:
        return run(cli)
    except KeyboardInterrupt:
        print("Shutting down...")
        return 0


if __name__ == "__main__":
    sys.exit(main())