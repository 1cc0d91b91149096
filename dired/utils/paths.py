"""Path helpers shared by the CLI and the TUI."""

import os
from pathlib import Path
from typing import Optional, Union


def directory_for(path: Optional[Union[str, Path]]) -> Path:
    """Directory to browse for a user-supplied path.

    No path means the working directory; a file means the directory that
    contains it. Anything else is returned as given and left for the listing
    loader to accept or reject.
    """
    if path is None:
        return Path.cwd()
    path = Path(os.path.abspath(os.path.expanduser(os.fspath(path))))
    if path.is_file():
        return path.parent
    return path
