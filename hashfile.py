"""Feed a file into a hash engine in fixed-size chunks."""
import logging

from hashalgo import FileOpenError, FileReadError

log = logging.getLogger(__name__)

MAX_FILE_BUFFER = 8000


def hash_file(algo, filename, chunk_size=MAX_FILE_BUFFER):
    """Absorb the contents of filename into algo.

    The file is read in chunk_size pieces and closed on every exit path.
    finalize() is left to the caller, so several files (or a file plus
    extra data) can be hashed into one digest.

    Raises FileOpenError if the file cannot be opened and FileReadError if
    reading fails part way; algo is then left holding a partial message.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be a positive integer")
    try:
        f = open(filename, 'rb')
    except OSError as e:
        raise FileOpenError("Could not open file for reading: %s" % (filename,)) from e

    total = 0
    with f:
        while True:
            try:
                chunk = f.read(chunk_size)
            except OSError as e:
                raise FileReadError("Error reading from file: %s" % (filename,)) from e
            if not chunk:
                break
            algo.absorb(chunk, len(chunk))
            total += len(chunk)

    log.debug("%s: absorbed %d bytes from %s", algo.name, total, filename)
    return True
