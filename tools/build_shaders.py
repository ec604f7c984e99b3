import argparse
import contextlib
import os
import subprocess
import sys
from dataclasses import dataclass, fields

from fxc_locator import DEFAULT_SDK_ROOT, locate_compiler, resolve_compiler
from shader_errors import BuildError, CompilationFailed, CompilerLaunchFailed, InvalidJob, UnexpectedIOFailure


@dataclass(frozen=True)
class ShaderJob:
    source: str
    profile: str
    entry: str
    output: str


# Stages embedded by the renderer (shaders/vs_egui.bin, shaders/ps_egui.bin)
EGUI_JOBS = (
    ShaderJob("egui.hlsl", "vs_4_0", "vs_egui", "vs_egui.bin"),
    ShaderJob("egui.hlsl", "ps_4_0", "ps_egui", "ps_egui.bin"),
)


def validate_jobs(jobs):
    for index, job in enumerate(jobs, start=1):
        for f in fields(ShaderJob):
            value = getattr(job, f.name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidJob(index, f.name)


@contextlib.contextmanager
def pushd(path):
    """Change into ``path`` for the duration of the block, restoring the old cwd on exit."""
    try:
        previous = os.getcwd()
        os.chdir(path)
    except OSError as e:
        raise UnexpectedIOFailure(f"Cannot enter shader directory {path}: {e}") from e
    try:
        yield
    finally:
        try:
            os.chdir(previous)
        except OSError as e:
            raise UnexpectedIOFailure(f"Cannot restore working directory {previous}: {e}") from e


def compiler_command(fxc, job, opt_level=3):
    return [str(fxc), job.source, "/nologo", f"/O{opt_level}",
            "/T", job.profile, "/E", job.entry, "/Fo", job.output]


def run_build(jobs, shader_dir, compiler=None, sdk_root=DEFAULT_SDK_ROOT, opt_level=3, verbose=False):
    jobs = list(jobs)
    validate_jobs(jobs)

    fxc = resolve_compiler(compiler) if compiler else locate_compiler(sdk_root=sdk_root)
    print(f"Using shader compiler: {fxc}")

    with pushd(shader_dir):
        for index, job in enumerate(jobs, start=1):
            print(f"[Shader] Compiling {job.source} ({job.entry}, {job.profile}) -> {job.output}")
            cmd = compiler_command(fxc, job, opt_level)
            if verbose:
                print(subprocess.list2cmdline(cmd))
            try:
                res = subprocess.run(cmd)
            except OSError as e:
                raise CompilerLaunchFailed(index, job, fxc, e) from e
            if res.returncode != 0:
                raise CompilationFailed(index, job, res.returncode)
            print(f"[Shader] {job.output} compiled successfully")

    print(f"Compiled {len(jobs)} shaders.")


def default_shader_dir():
    script_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(os.path.dirname(script_dir), "shaders")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Compile the egui Direct3D10 shaders with fxc.")
    p.add_argument("--shader-dir", default=default_shader_dir(),
                   help="Directory holding egui.hlsl; outputs are written there too.")
    p.add_argument("--fxc", default=None, help="Path to fxc.exe (default: PATH, then the Windows SDK).")
    p.add_argument("--sdk-root", default=DEFAULT_SDK_ROOT, help=f"SDK search root (default: {DEFAULT_SDK_ROOT}).")
    p.add_argument("--opt-level", type=int, choices=range(4), default=3, help="fxc optimization level (default: 3).")
    p.add_argument("-v", "--verbose", action="store_true", help="Print each compiler command line.")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        run_build(EGUI_JOBS, args.shader_dir, compiler=args.fxc, sdk_root=args.sdk_root,
                  opt_level=args.opt_level, verbose=args.verbose)
    except BuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
