from collections.abc import Iterator
from contextlib import contextmanager


@contextmanager
def workflow_step(workflow: str, subject: str, step: str) -> Iterator[None]:
    """Annotate and re-raise any error escaping one workflow step.

    The exception type is preserved; the note names the job and the step.
    Logging is left to the entry point that catches it.
    """
    try:
        yield
    except Exception as exc:
        exc.add_note(f"{workflow} {subject}: failed during {step}")
        raise
