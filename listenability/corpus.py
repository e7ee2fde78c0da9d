# License: BSD3

"""
Corpus management
"""
#
# A corpus here is just a directory of input files, each of which
# holds one document (a plain text, an analysed XMI document, or a
# delta request on such a document).
#
# We try to be somewhat agnostic to your directory structure.
# To this end we provide a FileId class which identifies a file by
# its document name and the processing stage it belongs to. Give us
# a mapping from FileId to filepaths and we do the rest.

import codecs
import glob
import os
import sys

from listenability.annotation import Document


class FileId(object):
    """
    Information needed to uniquely identify an input file.

    :param doc: document name (the file name without its extension)
    :type doc:  string

    :param stage: processing stage; for use if you have distinct
        files that correspond to different stages of your processing
        (eg. 'text', 'analysed', 'delta')
    :type stage: string
    """
    def __init__(self, doc, stage=None):
        self.doc = doc
        self.stage = stage

    def __str__(self):
        return "%s [%s]" % (self.doc, self.stage)

    def __repr__(self):
        return "FileId(%r, %r)" % (self.doc, self.stage)

    def _tuple(self):
        """
        For internal use by __hash__, __eq__, etc
        """
        return (self.doc, self.stage)

    def __hash__(self):
        return hash(self._tuple())

    def __eq__(self, other):
        return self._tuple() == other._tuple()

    def __lt__(self, other):
        return self._tuple() < other._tuple()

    def mk_global_id(self, local_id):
        """
        String representation of an identifier that should be unique
        to this corpus at least.

        We use the document name (but not the stage!) and the
        local id of the annotation
        """
        parts = [self.doc, local_id]
        return "_".join(str(p) for p in parts if p is not None)


class Reader(object):
    """
    `Reader` provides little more than dictionaries from `FileId`
    to data.

    :param rootdir: the top directory of the corpus
    :type rootdir: str

    A potentially useful pattern to apply here is to take a slice of
    these dictionaries for processing. For example, you might not want
    to read the whole corpus, but only some of its documents.

    .. code-block:: python

        reader = TextReader(corpus_dir)
        files = reader.files()
        subfiles = {k: v for k, v in files.items() if k.doc in ['a', 'b']}
        corpus = reader.slurp(subfiles)

    This is an abstract class; subclasses say which files they are
    interested in (`suffix`, `stage`) and how to read one (`read_file`)
    """
    suffix = None
    stage = None

    def __init__(self, root):
        self.rootdir = root

    def files(self, doc_glob=None):
        """
        Return a dictionary from FileId to filepaths.

        Parameters
        ----------
        doc_glob : str, optional
            Glob expression for document names ; if `None`, we use the
            wildcard '*' that matches all names.
        """
        doc_glob = doc_glob or '*'
        pattern = os.path.join(self.rootdir, doc_glob + self.suffix)
        res = {}
        for path in sorted(glob.glob(pattern)):
            doc = os.path.basename(path)[:-len(self.suffix)]
            res[FileId(doc, self.stage)] = path
        return res

    def slurp(self, cfiles=None, doc_glob=None, verbose=False):
        """
        Read the entire corpus if `cfiles` is `None` or else the
        subset specified by `cfiles`.

        Return a dictionary from FileId to whatever `read_file`
        produces for that file.

        Parameters
        ----------
        cfiles : dict, optional
            Dict of files like what `Reader.files()` would return.

        doc_glob : str, optional
            Glob pattern for document names ; ignored if `cfiles`
            is not None.

        verbose : boolean, defaults to False
            If True, print what we're reading to stderr.
        """
        if cfiles is None:
            subcorpus = self.files(doc_glob=doc_glob)
        else:
            subcorpus = cfiles
        return self.slurp_subcorpus(subcorpus, verbose=verbose)

    def slurp_subcorpus(self, cfiles, verbose=False):
        """
        Read every file in `cfiles`
        """
        corpus = {}
        counter = 0
        for k in sorted(cfiles):
            if verbose:
                sys.stderr.write("\rSlurping corpus dir [%d/%d]" %
                                 (counter, len(cfiles)))
            corpus[k] = self.read_file(k, cfiles[k])
            counter += 1
        if verbose:
            sys.stderr.write("\rSlurping corpus dir [%d/%d done]\n" %
                             (counter, len(cfiles)))
        return corpus

    def read_file(self, key, path):
        """
        Derived classes should implement this function
        """
        raise NotImplementedError()

    def filter(self, d, pred):
        """
        Convenience function equivalent to ::

            { k:v for k,v in d.items() if pred(k) }
        """
        return dict([(k, v) for k, v in d.items() if pred(k)])


class TextReader(Reader):
    """
    Reader for a directory of UTF-8 encoded plain text files (`.txt`).
    Each file becomes a document without any annotations
    """
    suffix = '.txt'
    stage = 'text'

    def read_file(self, key, path):
        with codecs.open(path, 'r', 'utf-8') as stream:
            doc = Document([], stream.read())
        doc.set_origin(key)
        return doc
