"""Run independent contract reads concurrently, failing on the first error."""

from concurrent.futures import FIRST_EXCEPTION, Executor, wait
from typing import Any, Callable, List, Sequence


def gather(executor: Executor, calls: Sequence[Callable[[], Any]]) -> List[Any]:
    """
    Submit every call and return their results in submission order.

    If any call raises, reads that have not started are cancelled and the
    first failure is re-raised; results of the others are discarded.
    """
    futures = [executor.submit(call) for call in calls]
    done, pending = wait(futures, return_when=FIRST_EXCEPTION)
    for future in pending:
        future.cancel()
    for future in futures:
        if future in done and future.exception() is not None:
            raise future.exception()
    return [future.result() for future in futures]
