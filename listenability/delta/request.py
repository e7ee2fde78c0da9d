# License: BSD3

"""
JSON envelope for delta requests and responses.

A request carries an analysed document, edits on its text, and some
client state: ::

    {
      "xmi": "...",
      "deltas": [{"begin": 4, "end": 7, "new": "dog"}, ...],
      "state": ...
    }

The state can be any JSON value; it is handed back in the response
without ever being looked at: ::

    {
      "xmi": "...",
      "state": ...
    }
"""

import json

from listenability.xmi import InvalidDocumentError, read_xmi, write_xmi
from .edits import EditPlan, MalformedEditsError, TextEdit
from .relocate import apply_edits


JSON_XMI = 'xmi'
JSON_DELTAS = 'deltas'
JSON_STATE = 'state'

JSON_BEGIN = 'begin'
JSON_END = 'end'
JSON_NEW_TEXT = 'new'


def _is_int(value):
    "JSON integer (booleans need not apply)"
    return isinstance(value, int) and not isinstance(value, bool)


def read_delta(obj):
    """
    A `TextEdit` from its JSON object form

    Raise MalformedEditsError if the object is not of the expected
    shape
    """
    if not isinstance(obj, dict):
        raise MalformedEditsError("Delta is not a JSON object: %r" % (obj,))
    begin = obj.get(JSON_BEGIN)
    end = obj.get(JSON_END)
    new_text = obj.get(JSON_NEW_TEXT)
    if not (_is_int(begin) and _is_int(end)):
        raise MalformedEditsError(
            "Delta needs integer '%s' and '%s': %r" %
            (JSON_BEGIN, JSON_END, obj))
    if not isinstance(new_text, str):
        raise MalformedEditsError(
            "Delta needs a string '%s': %r" % (JSON_NEW_TEXT, obj))
    return TextEdit(begin, end, new_text)


def delta_to_json(edit):
    """
    JSON object form of a `TextEdit`
    """
    return {JSON_BEGIN: edit.begin,
            JSON_END: edit.end,
            JSON_NEW_TEXT: edit.new_text}


class DeltaRequest(object):
    """
    A request to apply edits to an analysed document.

    Parameters
    ----------
    xmi : string
        The original document, serialised as XMI
    deltas : list of TextEdit
        Edits on the original text, in any order
    state : any JSON value
        Opaque client state
    """
    def __init__(self, xmi, deltas, state=None):
        self.xmi = xmi
        self.deltas = list(deltas)
        self.state = state

    @classmethod
    def from_json(cls, obj):
        """
        Request from its (already parsed) JSON object form
        """
        if not isinstance(obj, dict):
            raise InvalidDocumentError("Delta request is not a JSON object")
        xmi = obj.get(JSON_XMI)
        if not isinstance(xmi, str):
            raise InvalidDocumentError(
                "Delta request has no '%s' string" % JSON_XMI)
        deltas = obj.get(JSON_DELTAS)
        if not isinstance(deltas, list):
            raise MalformedEditsError(
                "Delta request has no '%s' list" % JSON_DELTAS)
        return cls(xmi, [read_delta(x) for x in deltas], obj.get(JSON_STATE))

    def to_json(self):
        """
        JSON object form of this request
        """
        return {JSON_XMI: self.xmi,
                JSON_DELTAS: [delta_to_json(x) for x in self.deltas],
                JSON_STATE: self.state}

    def decode(self):
        """
        Read the original document and check the edits against it.

        This is where anything wrong with the request shows up
        (InvalidDocumentError, MalformedEditsError), before
        anything gets modified.

        Returns
        -------
        plan : EditPlan
        """
        doc = read_xmi(self.xmi)
        return EditPlan(doc, self.deltas, state=self.state)


class DeltaResponse(object):
    """
    The edited document, with the client state of its request
    """
    def __init__(self, doc, state=None, dropped=None):
        self.doc = doc
        self.state = state
        self.dropped = dropped or []

    def to_json(self):
        """
        JSON object form of this response
        """
        return {JSON_XMI: write_xmi(self.doc),
                JSON_STATE: self.state}


def read_request(string):
    """
    Parse a delta request from its JSON text

    Raise InvalidDocumentError if this is not JSON at all
    """
    try:
        obj = json.loads(string)
    except ValueError as oops:
        raise InvalidDocumentError("Delta request is not JSON: %s" % oops)
    return DeltaRequest.from_json(obj)


def process_request(request):
    """
    Apply a delta request.

    Returns
    -------
    response : DeltaResponse
        The edited document (with a record of any annotations that
        did not survive the edits)
    """
    plan = request.decode()
    new_doc, dropped = apply_edits(plan)
    return DeltaResponse(new_doc, state=plan.state, dropped=dropped)


def write_response(response):
    """
    JSON text for a delta response
    """
    return json.dumps(response.to_json())
