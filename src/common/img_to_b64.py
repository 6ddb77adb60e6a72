import base64
from pathlib import Path


def img_to_b64(img_path: str | Path) -> str:
    try:
        with Path(img_path).open("rb") as img_file:
            return base64.b64encode(img_file.read()).decode("utf-8")
    except FileNotFoundError:
        raise ValueError(f"Image file not found: {img_path}") from None
    except IsADirectoryError:
        raise ValueError(f"Expected a file but found a directory: {img_path}") from None
    except Exception as e:
        raise ValueError(f"Failed to convert image to base64: {e}") from e


def b64_to_img(data: str, img_path: str | Path) -> bool:
    """Write base64 image data to a new file.

    Returns False without touching the file when it already exists.
    """
    path = Path(img_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        img_file = path.open("xb")
    except FileExistsError:
        return False

    try:
        with img_file:
            img_file.write(base64.b64decode(data))
    except Exception as e:
        path.unlink(missing_ok=True)
        raise ValueError(f"Failed to write image to {img_path}: {e}") from e

    return True
