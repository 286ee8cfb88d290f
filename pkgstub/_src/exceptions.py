class DescriptorLoadError(Exception):
    def __init__(self, path, err):
        self.path = str(path)
        self.msg = (
            f"Failed to load package descriptor!"
            f"\nDescriptor: `{self.path}`"
            f"\nError message: {err}"
        )
        super().__init__(self.msg)


class InvalidSpecificationError(Exception):
    def __init__(self, path):
        self.path = str(path)
        self.msg = f"descriptor `{self.path}` has neither a stub line nor a loadable body"
        super().__init__(self.msg)


class ExtensionBuildFailed(Exception):
    def __init__(self, command, cwd, err):
        self.msg = (
            f"Failed to build extension!"
            f"\nRan command: `{' '.join(command)}`"
            f"\ncwd: `{cwd}`"
            f"\nError message: {err}"
        )
        super().__init__(self.msg)
