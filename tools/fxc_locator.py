import os
import shutil
from collections import namedtuple
from pathlib import Path

from shader_errors import CompilerNotFound

DEFAULT_EXE_NAME = "fxc.exe"
DEFAULT_SDK_ROOT = r"C:\Program Files (x86)\Windows Kits\10\bin"
PREFERRED_ARCH = "x64"

CompilerCandidate = namedtuple("CompilerCandidate", ["path", "preferred"])


def _hint(exe_name):
    return (f"Install the Windows SDK, add {exe_name} to PATH, "
            f"or pass --fxc /path/to/{exe_name}.")


def resolve_compiler(path):
    """Check an explicitly requested compiler path."""
    candidate = Path(path)
    if not candidate.is_file():
        raise CompilerNotFound(f"Shader compiler not found at {candidate}. {_hint(candidate.name)}")
    return candidate


def _walk_candidates(exe_name, sdk_root, preferred_arch):
    # os.walk skips unreadable subdirectories when onerror is not set
    wanted = exe_name.lower()
    arch = preferred_arch.lower()
    for root, dirs, files in os.walk(sdk_root):
        dirs.sort()
        for file in sorted(files):
            if file.lower() != wanted:
                continue
            rel_dirs = Path(root).relative_to(sdk_root).parts
            preferred = any(part.lower() == arch for part in rel_dirs)
            yield CompilerCandidate(Path(root) / file, preferred)


def locate_compiler(exe_name=DEFAULT_EXE_NAME, sdk_root=DEFAULT_SDK_ROOT,
                    preferred_arch=PREFERRED_ARCH) -> Path:
    """Find the shader compiler executable.

    PATH wins over everything else. Failing that, the SDK root is walked and a
    match under a ``preferred_arch`` directory is returned ahead of any other
    match. Raises CompilerNotFound when both come up empty.
    """
    # 1. Check PATH
    on_path = shutil.which(exe_name)
    if on_path:
        return Path(on_path)

    # 2. Search the SDK install
    if not os.path.isdir(sdk_root):
        raise CompilerNotFound(
            f"'{exe_name}' is not on PATH and SDK root {sdk_root} does not exist. {_hint(exe_name)}")

    fallback = None
    for candidate in _walk_candidates(exe_name, sdk_root, preferred_arch):
        if candidate.preferred:
            return candidate.path
        if fallback is None:
            fallback = candidate

    if fallback is not None:
        return fallback.path

    raise CompilerNotFound(
        f"'{exe_name}' is not on PATH and was not found under {sdk_root}. {_hint(exe_name)}")
