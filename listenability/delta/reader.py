# License: BSD3

"""
Reading delta requests from a corpus directory.

Requests are stored one per file, either as plain JSON (`.json`) or
gzip-compressed JSON (`.json.gz`)
"""

import glob
import gzip
import os
import zlib

from listenability.corpus import FileId, Reader
from listenability.xmi import InvalidDocumentError
from .request import read_request


SUFFIXES = ['.json', '.json.gz']


class DeltaReader(Reader):
    """
    Reader for a directory of delta requests; slurps into a dictionary
    from FileId to `DeltaRequest`
    """
    stage = 'delta'

    def files(self, doc_glob=None):
        doc_glob = doc_glob or '*'
        res = {}
        for suffix in SUFFIXES:
            pattern = os.path.join(self.rootdir, doc_glob + suffix)
            for path in sorted(glob.glob(pattern)):
                doc = os.path.basename(path)[:-len(suffix)]
                res[FileId(doc, self.stage)] = path
        return res

    def read_file(self, key, path):
        """
        Read a single request file

        Raise InvalidDocumentError if the file cannot be read (eg. a
        corrupt or truncated gzip file) or does not hold a request
        """
        try:
            if path.endswith('.gz'):
                with gzip.open(path, 'rb') as stream:
                    raw = stream.read()
            else:
                with open(path, 'rb') as stream:
                    raw = stream.read()
        except (OSError, EOFError, zlib.error) as oops:
            raise InvalidDocumentError("Could not read %s: %s" % (path, oops))
        return read_request(raw)
