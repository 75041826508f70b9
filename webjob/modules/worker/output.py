from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TextIO

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class TimestampWriter:
    """Append-only text file receiving one timestamp line per iteration."""
    
    def __init__(self, path: Path):
        self.path = Path(path)
        self._stream: Optional[TextIO] = None
    
    @property
    def closed(self) -> bool:
        return self._stream is None
    
    def open(self) -> 'TimestampWriter':
        """Create the parent directory if needed and open the file for appending."""
        if self._stream is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = open(self.path, 'a', encoding='utf-8')
        return self
    
    def write_timestamp(self, now: Optional[datetime] = None) -> str:
        """Write one full line and flush it to disk. Returns the written timestamp."""
        if self._stream is None:
            raise ValueError(f"Output file {self.path} is not open")
        stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
        self._stream.write(f"{stamp}\n")
        self._stream.flush()
        return stamp
    
    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
    
    def __enter__(self) -> 'TimestampWriter':
        return self.open()
    
    def __exit__(self, *exc_info: Any) -> None:
        self.close()
