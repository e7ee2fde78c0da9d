# License: BSD3

"""
Segmentation into paragraphs, sentences and tokens, using NLTK's
span-aware tokenizers (no trained models needed)
"""

import re

from nltk.tokenize import BlanklineTokenizer, WordPunctTokenizer
from nltk.tokenize.punkt import PunktSentenceTokenizer

from listenability.annotation import Span
from .base import (DOCUMENT, PARAGRAPH, SENTENCE, TOKEN,
                   Engine, whole_text)


TOKEN_KIND = 'kind'
"""
Token feature telling words ('word') from punctuation ('punct')
"""

_WORD_CHAR = re.compile(r'\w', re.UNICODE)


def is_punctuation(token_text):
    """
    True if a token has no word characters at all
    """
    return _WORD_CHAR.search(token_text) is None


def _strip_span(text, span):
    "span narrowed so as to leave out surrounding whitespace"
    chunk = text[span.char_start:span.char_end]
    lead = len(chunk) - len(chunk.lstrip())
    trail = len(chunk) - len(chunk.rstrip())
    return Span(span.char_start + lead, span.char_end - trail)


class Tokenizer(Engine):
    """
    Adds a `Document` unit over the whole text, `Paragraph` units
    (separated by blank lines), `Sentence` units within each paragraph,
    and `Token` units within each sentence.

    An edit may well move sentence boundaries anywhere in its
    paragraph and beyond, so we always re-tokenize the whole text.
    """
    NAME = 'tokenizer'
    PRODUCES = (DOCUMENT, PARAGRAPH, SENTENCE, TOKEN)

    def __init__(self):
        self._paragraphs = BlanklineTokenizer()
        self._sentences = PunktSentenceTokenizer()
        self._tokens = WordPunctTokenizer()

    def paragraph_spans(self, text):
        "spans of the paragraphs in a text"
        spans = (Span(start, end) for start, end in
                 self._paragraphs.span_tokenize(text))
        spans = (_strip_span(text, x) for x in spans)
        return [x for x in spans if x.length() > 0]

    def sentence_spans(self, text, para_span):
        "spans of the sentences in a paragraph"
        chunk = text[para_span.char_start:para_span.char_end]
        return [Span(start, end).absolute(para_span) for start, end in
                self._sentences.span_tokenize(chunk)]

    def token_spans(self, text, sent_span):
        "spans of the tokens in a sentence"
        chunk = text[sent_span.char_start:sent_span.char_end]
        return [Span(start, end).absolute(sent_span) for start, end in
                self._tokens.span_tokenize(chunk)]

    def annotate(self, doc):
        text = doc.text() or ''
        doc.add_unit(DOCUMENT, whole_text(doc))
        for para_span in self.paragraph_spans(text):
            doc.add_unit(PARAGRAPH, para_span)
            for sent_span in self.sentence_spans(text, para_span):
                doc.add_unit(SENTENCE, sent_span)
                for tok_span in self.token_spans(text, sent_span):
                    kind = 'punct' if is_punctuation(doc.text(tok_span))\
                        else 'word'
                    doc.add_unit(TOKEN, tok_span, {TOKEN_KIND: kind})
