# License: BSD3

"""
Applying edits ("deltas") to an analysed document.

Given a document, its annotations, and a list of replacements on its
text, we build the edited text, carry over the annotations that the
edits leave untouched, and mark each edited region with a `Delta` unit
recording the text it replaced.

* `edits`: the edits and the validated `EditPlan`
* `rebuild`: the edited text
* `relocate`: moving annotations over, and the delta markers
* `request`: the JSON request/response envelope
* `reader`: reading requests from a directory
"""

from .edits import EditPlan, MalformedEditsError, TextEdit
from .rebuild import rebuild_text
from .relocate import (DELTA_TYPE, OLD_TEXT_FEATURE,
                       add_delta_marker, apply_edits, is_delta,
                       move_annotations, relocate_annotations)
from .request import (DeltaRequest, DeltaResponse,
                      process_request, read_request, write_response)
