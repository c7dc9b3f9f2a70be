from __future__ import annotations


class UnsolvableError(ValueError):
    """No combination of presses reproduces the target."""

    def __init__(
        self,
        kind: str,
        detail: str | None = None,
        machine_index: int | None = None,
        line_number: int | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.machine_index = machine_index
        self.line_number = line_number
        super().__init__(self._format())

    def __reduce__(self):  # noqa: ANN204
        return (type(self), (self.kind, self.detail, self.machine_index, self.line_number))

    def _format(self) -> str:
        where = ""
        if self.machine_index is not None:
            where = f" for machine {self.machine_index}"
            if self.line_number is not None:
                where += f" (line {self.line_number})"
        text = f"No {self.kind} solution{where}"
        if self.detail:
            text += f": {self.detail}"
        return text

    def for_machine(self, machine_index: int, line_number: int | None = None) -> "UnsolvableError":
        return UnsolvableError(self.kind, self.detail, machine_index, line_number)


class MalformedInputError(ValueError):
    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)

    def __reduce__(self):  # noqa: ANN204
        return (type(self), (self.message, self.line_number))
