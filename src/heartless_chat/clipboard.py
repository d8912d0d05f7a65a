import asyncio
from typing import Protocol, runtime_checkable

import pyperclip


class ClipboardError(Exception):
    pass


@runtime_checkable
class Clipboard(Protocol):
    async def write_text(self, content: str) -> None:
        """Write content to the system clipboard. Raises ClipboardError on failure."""
        ...


class PyperclipClipboard:
    async def write_text(self, content: str) -> None:
        try:
            # pyperclip shells out to xclip/pbcopy; keep it off the event loop.
            await asyncio.to_thread(pyperclip.copy, content)
        except pyperclip.PyperclipException as ex:
            raise ClipboardError(str(ex)) from ex
