# License: BSD3

"""
Produce the text of a document after applying a set of edits
"""


def rebuild_text(original_text, edits):
    """
    Apply edits (sorted, non-overlapping; see `EditPlan`) to a text.

    We walk the original text once, copying the untouched gaps between
    edits and substituting each edit's new text for its range.

    Parameters
    ----------
    original_text : string
    edits : iterable of TextEdit

    Returns
    -------
    new_text : string
    """
    parts = []
    end = 0
    for edit in edits:
        if edit.begin > end:
            parts.append(original_text[end:edit.begin])
        parts.append(edit.new_text)
        end = edit.end
    if end < len(original_text):
        parts.append(original_text[end:])
    return ''.join(parts)
