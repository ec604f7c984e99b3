class BuildError(Exception):
    pass


class CompilerNotFound(BuildError):
    pass


class InvalidJob(BuildError):
    def __init__(self, index, field):
        super().__init__(f"Shader job {index} has an empty '{field}'")
        self.index = index
        self.field = field


class CompilationFailed(BuildError):
    def __init__(self, index, job, returncode):
        super().__init__(
            f"Error compiling job {index} ({job.entry} from {job.source}): "
            f"compiler exited with code {returncode}")
        self.index = index
        self.job = job
        self.returncode = returncode


class UnexpectedIOFailure(BuildError):
    pass


class CompilerLaunchFailed(BuildError):
    def __init__(self, index, job, compiler, reason):
        super().__init__(
            f"Could not start {compiler} for job {index} ({job.entry} from {job.source}): {reason}")
        self.index = index
        self.job = job
        self.compiler = compiler
