"""
DataCore - loading and saving the to-do document.

The whole document is read once when a command starts and written back in
full after a successful mutation. There are no partial writes.
"""
from pathlib import Path
from typing import Optional, Union
from .io import load_model, save_model
from later.models import ListCollection, Sublist, DEFAULT_LIST
from later.logs import get_logger

log = get_logger("data")

class DataCore:
    """Owns the on-disk document and the lists loaded from it."""

    def __init__(self, data_file : Union[Path, str]):
        self.data_file = Path(data_file)
        self.lists : Optional[ListCollection] = None
        self.created = False

    def load(self) -> ListCollection:
        """
        Read every list from the document.

        A missing or empty document is replaced by one holding only the
        default list, which is saved right away. The default list is
        recreated in memory if a document lacks it.
        """
        lists = load_model(ListCollection, self.data_file)
        if lists is None:
            log.info(f"Generating new storage file in {self.data_file}")
            self.lists = ListCollection()
            self.lists.ensure_default()
            self.created = True
            self.save()
            return self.lists

        self.lists = lists
        if self.lists.ensure_default():
            log.debug(f"Default list '{DEFAULT_LIST}' was missing, recreated it")
        log.debug(f"Loaded {len(self.lists)} list(s) from {self.data_file}")
        return self.lists

    def get_list(self, name : str = DEFAULT_LIST) -> Sublist:
        if self.lists is None:
            self.load()
        return self.lists.get(name)

    def save(self):
        """Write every list back to the document."""
        if self.lists is None:
            return
        save_model(self.lists, self.data_file, create_dirs=True)
        log.debug(f"Saved {len(self.lists)} list(s) to {self.data_file}")
