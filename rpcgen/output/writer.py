"""Write request batches to numbered JSON files."""

from pathlib import Path
from typing import List, Optional

from rpcgen.logging_config import get_logger
from rpcgen.rpc.envelope import RpcRequest, dump_requests

logger = get_logger("output")


def chunk_path(output: str | Path, index: int) -> Path:
    """Return the path of chunk ``index``: ``<output>.<index>``."""
    output = Path(output)
    return output.with_name(f"{output.name}.{index}")


def write_chunks(
    requests: List[RpcRequest],
    output: str | Path,
    chunk_size: Optional[int] = None,
) -> List[Path]:
    """
    Split requests into chunks and write each as a JSON array.

    An empty request list still produces one file holding ``[]`` so every run
    leaves an output behind.

    Args:
        requests: Requests in output order.
        output: Base output path; chunk files get a numeric suffix.
        chunk_size: Maximum requests per file. None writes a single file.

    Returns:
        Paths of the files written, in order.
    """
    if chunk_size is not None and chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")

    size = chunk_size or max(1, len(requests))
    chunks = [requests[start:start + size] for start in range(0, len(requests), size)]
    if not chunks:
        chunks = [[]]

    Path(output).parent.mkdir(parents=True, exist_ok=True)

    paths: List[Path] = []
    for index, chunk in enumerate(chunks):
        path = chunk_path(output, index)
        path.write_text(dump_requests(chunk), encoding="utf-8")
        logger.debug("Wrote %d requests to %s", len(chunk), path)
        paths.append(path)

    return paths
