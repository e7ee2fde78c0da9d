"""
The listenability library analyses texts for how easy they are to
follow when read aloud, and keeps those analyses in step with the text
as it gets edited. It has a three-layer structure:

* base layer (files, annotations)
* tool layer (the XMI file format, edits)
* analysis layer (engines that annotate documents)

Layers
~~~~~~
The base layer provides two sublayers:

* file management (listenability.corpus): basic model for corpus
  traversal, for selecting slices of the corpus

* annotation (listenability.annotation): a text plus an ordered index
  of span annotations over it, adhering closely to the UIMA model

Building on the base layer, `listenability.xmi` reads and writes
documents in the XMI format, and `listenability.delta` applies edits
("deltas") to an annotated document: the text is rebuilt, the
annotations the edits leave alone are carried over to their new
positions, and each edited region is marked.

Finally, `listenability.engines` holds the analysis engines (a
tokenizer, listenability features) and the registry used to build
pipelines of them. Engines that understand edit markers only redo the
work near an edit ::

          engines                         [analysis layer]
             |
        +----+----------+
        |               |
        v               v
       xmi     <-     delta               [tool layer]
        |               |
        v               v
     corpus -> annotation                 [base layer]

The `listenability` command (`listenability.cmd`) ties these together.
"""

# License: BSD3
