# poseview

This package logs camera pose estimates and plays back an image sequence.
It has these modules:

- `poseview.data` holds a reference `CAMERA_MATRIX` (3x3 intrinsics) and
  `POSES`, which is a list of 50 `(rvec, tvec)` pairs. Each `rvec` is a Rodrigues
  rotation and each `tvec` is a translation.
- `poseview.matrix` holds rigid-transform helpers:
  - `rodrigues_to_matrix` and `matrix_to_rodrigues`
  - `rotation_from_transform` and `translation_from_transform`
  - `transform_from_translation_rotation_rodrigues` and `rodrigues_from_transform`
  - `convert_world_to_local` and `convert_local_to_world`. These apply only the
    rotation block of a 4x4 transform, or of its inverse.
- `poseview.recording` holds `RecordingStream`, which collects `LogRecord`
  entries. Each record has a `path`, a `kind` and a `data` dict.
  - A stream made with `enabled=False` ignores every `log` call.
  - `connect_tcp("HOST:PORT")` opens a TCP connection. It first sends a JSON
    header line holding the `application_id`. It then sends every record already
    logged and every later record, one JSON object per line. Arrays become lists,
    enums become their values and bytes become base64.
  - The module also defines the `TextLogLevel` and `ColorModel` enums.
- `poseview.visual_log` builds records on a stream:
  - `log_message` and `log_stream_and_clear` log text. They also print it, to
    stderr for `TextLogLevel.ERROR` and to stdout otherwise.
  - `log_transform3d`, `log_axis_system` and `log_points3d`.
  - `log_mat_image`. When a `tag` is given, it draws the tag into the image in
    place.
  - `log_keypoints_image`. It turns a grayscale image into three channels and
    draws a circle at each `KeyPoint`.
  - `log_pose_estimation`. It logs the rvec/tvec text and tensors, the camera
    matrix, a world axis system, the image (or an error if it is empty), and a
    pinhole camera placed at the inverse of the view transform.
- `poseview.images` reads images with Pillow:
  - `read_image` returns a uint8 array, either grayscale or BGR.
  - `is_image_file` checks the file extension.
  - `load_saved_images` loads one file in grayscale, or every image in a folder
    in colour, sorted by name.
  - `ImageBuffer` is a ring buffer over the `.png` files in a directory. Background
    loader threads take turns to keep it filled. The methods are `next_image`,
    `consume_image`, `stats` and `shutdown`, and the buffer can also be used as a
    context manager. Every loader thread writes `loader_<n>.csv` into `csv_dir`,
    or into the current directory when `csv_dir` is not given. Each row of that
    file records one image that the thread loaded.
- `poseview.cli` holds `parse_args`, `help_text`, `build_url` and the `Cli`
  dataclass.
- `poseview.app` holds `run` and `main`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

`poseview` reads the `.png` frames in the `doom_gif` directory under the
current directory and loads up to 20 of them into an `ImageBuffer`. It waits
one second, then logs one frame every 100 ms to the recording stream, and it
keeps going until you interrupt it. It writes `loader_0.csv` into the current
directory. It exits with status 1 in three cases:

- the directory is missing or holds no images;
- a frame cannot be read;
- the viewer connection fails.

```
poseview --help
poseview --enable_rerun false
poseview --viewer_addr 127.0.0.1:9876
```

Options:

- `-h`, `--help`: print the help text and exit.
- `--enable_rerun {true,false}`: `false` or `0` (in any letter case) turns
  logging off. The default is on, and in that case the program connects to
  `--viewer_addr`.
- `--viewer_addr IP:PORT`: the address to connect to. The default is
  `127.0.0.1:9876`.
- `--threads N`: this value is parsed and reported, but the command always uses
  a single loader thread.

## Library use

```python
import numpy as np
from poseview.data import CAMERA_MATRIX, POSES
from poseview.recording import RecordingStream
from poseview.visual_log import log_pose_estimation

rec = RecordingStream("mve", True)
image = np.zeros((64, 64, 3), dtype=np.uint8)
rvec, tvec = POSES[0]
log_pose_estimation("world", image, rvec, tvec, CAMERA_MATRIX, rec)
for record in rec.records:
    print(record.path, record.kind)
```

## What this package does not do

There is no viewer in this package. `RecordingStream` only keeps records in
memory and, once connected, writes them as newline-delimited JSON to a TCP
socket. Displaying them is left to whatever program listens at that address.