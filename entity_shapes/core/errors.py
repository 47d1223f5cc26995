"""Error types raised by schema graph building and model merging."""


class EntityShapesError(Exception):
    pass


class SchemaIntegrityError(EntityShapesError):
    """The schema graph is not resolvable: collisions, dangling targets, embed cycles."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Schema graph integrity check failed: " + "; ".join(self.problems))


class MergeConflictError(EntityShapesError):
    """Two merge operands assign incompatible value types to the same field path."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot merge field '{path}': {reason}")
