# License: BSD3

"""
The XMI_ serialisation of UIMA documents, in `listenability.annotation`
form

We only deal with the subset of XMI needed to carry a single text (one
"sofa") and the span annotations over it: ::

    <xmi:XMI xmlns:xmi="http://www.omg.org/XMI" ...>
      <cas:NULL xmi:id="0"/>
      <type:Token xmi:id="1" sofa="3" begin="0" end="3" pos="DT"/>
      <type:Sentence xmi:id="2" sofa="3" begin="0" end="12"/>
      <cas:Sofa xmi:id="3" sofaNum="1" sofaID="_InitialView"
                mimeType="text" sofaString="The cat sat."/>
      <cas:View sofa="3" members="1 2"/>
    </xmi:XMI>

Any element with `begin` and `end` attributes is read as a unit whose
type is the element's local name and whose features are its remaining
attributes. If the document has a view, only its members are read.

You're likely most interested in `read_xmi` and `write_xmi`

.. _XMI: https://uima.apache.org/d/uimaj-current/references.html#ugr.ref.xmi
"""

import codecs
import xml.etree.ElementTree as ET

from listenability.annotation import Span, Unit, Document
from listenability.corpus import Reader
from listenability.internalutil import (ListenabilityXmlException,
                                        local_name,
                                        on_single_element)


XMI_NS = 'http://www.omg.org/XMI'
CAS_NS = 'http:///uima/cas.ecore'
TYPE_NS = 'http:///de/webis/listenability/types.ecore'

NAMESPACES = {'xmi': XMI_NS,
              'cas': CAS_NS,
              'type': TYPE_NS}

for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)

_XMI_DECL = '<?xml version="1.0" encoding="UTF-8"?>'
_XMI_ID = '{%s}id' % XMI_NS

RESERVED_ATTRIBUTES = frozenset([_XMI_ID, 'sofa', 'begin', 'end'])
"""
Attributes of annotation elements that are not features
"""


class InvalidDocumentError(Exception):
    """
    The serialised form of a document could not be read
    """
    def __init__(self, msg):
        super(InvalidDocumentError, self).__init__(msg)


class XmiOutputSettings(object):
    """
    Non-essential aspects of XMI output, such as the order that
    features are written out. Controlling these settings could be
    useful when you want to automatically modify an existing document,
    but produce only minimal textual diffs along the way.
    """
    def __init__(self, feature_order):
        self.fs_order = feature_order


DEFAULT_OUTPUT_SETTINGS = XmiOutputSettings([])


def ordered_keys(preferred, d):
    """
    Keys from a dictionary starting with 'preferred' ones
    in the order of preference, the rest sorted
    """
    return ([k for k in preferred if k in d] +
            sorted(k for k in d if k not in preferred))


def _qname(namespace, tag):
    "ElementTree name for a namespaced tag or attribute"
    return '{%s}%s' % (namespace, tag)


# ---------------------------------------------------------------------
# reading
# ---------------------------------------------------------------------

def is_annotation_node(node):
    """
    True if the XMI element stands for a span annotation
    """
    return 'begin' in node.attrib and 'end' in node.attrib


def read_node(node, context=None):
    def get_one(name, default):
        return on_single_element(node, default, read_node, name,
                                 NAMESPACES)

    tag = local_name(node.tag)

    if tag == 'XMI':
        text = get_one('cas:Sofa', None)
        views = [read_node(x) for x in node.findall('cas:View', NAMESPACES)]
        members = frozenset().union(*views) if views else None
        units = [read_node(x, 'annotation') for x in node
                 if is_annotation_node(x)]
        if members is not None:
            units = [x for x in units if x.local_id() in members]
        return (text, units)

    elif tag == 'Sofa':
        if 'sofaString' not in node.attrib:
            raise ListenabilityXmlException("Sofa without a sofaString")
        return node.attrib['sofaString']

    elif tag == 'View':
        return frozenset(node.attrib.get('members', '').split())

    elif context == 'annotation':
        anno_id = node.attrib.get(_XMI_ID)
        span = Span(int(node.attrib['begin']), int(node.attrib['end']))
        features = dict((k, v) for k, v in node.attrib.items()
                        if k not in RESERVED_ATTRIBUTES)
        return Unit(anno_id, span, tag, features)

    else:
        raise ListenabilityXmlException("Don't know how to read "
                                        "node %s" % node.tag)


def read_xmi(xmi):
    """
    Read a document from its XMI serialisation (a string or bytes)

    Raise InvalidDocumentError if this cannot be done
    """
    try:
        root = ET.fromstring(xmi)
        (text, units) = read_node(root)
    except ET.ParseError as oops:
        raise InvalidDocumentError("Invalid XMI: %s" % oops)
    except ListenabilityXmlException as oops:
        raise InvalidDocumentError("Invalid XMI: %s" % oops)
    except ValueError as oops:
        raise InvalidDocumentError("Invalid XMI offsets: %s" % oops)
    return Document(units, text)


def read_xmi_file(filename):
    """
    Read a single XMI file
    """
    with open(filename, 'rb') as stream:
        return read_xmi(stream.read())


# ---------------------------------------------------------------------
# writing
# ---------------------------------------------------------------------

def unit_to_xml(unit, sofa_id, settings=DEFAULT_OUTPUT_SETTINGS):
    """
    XMI element for a single unit annotation
    """
    clashes = [k for k in unit.features if k in RESERVED_ATTRIBUTES]
    if clashes:
        raise ValueError("Can't write features %s of %s as XMI attributes" %
                         (', '.join(clashes), unit))
    elm = ET.Element(_qname(TYPE_NS, unit.type))
    elm.set(_XMI_ID, str(unit.local_id()))
    elm.set('sofa', sofa_id)
    elm.set('begin', str(unit.span.char_start))
    elm.set('end', str(unit.span.char_end))
    for k in ordered_keys(settings.fs_order, unit.features):
        elm.set(k, str(unit.features[k]))
    return elm


def document_to_xml(doc, settings=DEFAULT_OUTPUT_SETTINGS):
    """
    XMI element tree for a document
    """
    units = doc.units
    sofa_id = doc.next_id()
    elm = ET.Element(_qname(XMI_NS, 'XMI'))
    elm.set(_qname(XMI_NS, 'version'), '2.0')
    null_elm = ET.Element(_qname(CAS_NS, 'NULL'))
    null_elm.set(_XMI_ID, '0')
    elm.append(null_elm)
    elm.extend([unit_to_xml(x, sofa_id, settings) for x in units])
    sofa_elm = ET.Element(_qname(CAS_NS, 'Sofa'))
    sofa_elm.set(_XMI_ID, sofa_id)
    sofa_elm.set('sofaNum', '1')
    sofa_elm.set('sofaID', '_InitialView')
    sofa_elm.set('mimeType', 'text')
    sofa_elm.set('sofaString', doc.text() or '')
    view_elm = ET.Element(_qname(CAS_NS, 'View'))
    view_elm.set('sofa', sofa_id)
    view_elm.set('members', ' '.join(str(x.local_id()) for x in units))
    elm.extend([sofa_elm, view_elm])
    return elm


def write_xmi(doc, settings=DEFAULT_OUTPUT_SETTINGS):
    """
    Serialise a document to an XMI string
    """
    elem = document_to_xml(doc, settings=settings)
    return _XMI_DECL + ET.tostring(elem, encoding='unicode')


def write_xmi_file(filename, doc, settings=DEFAULT_OUTPUT_SETTINGS):
    """
    Write a document to XMI in the given path
    """
    with codecs.open(filename, 'w', 'utf-8') as fout:
        fout.write(write_xmi(doc, settings=settings))


class XmiReader(Reader):
    """
    Reader for a directory of analysed documents (`.xmi`)
    """
    suffix = '.xmi'
    stage = 'analysed'

    def read_file(self, key, path):
        doc = read_xmi_file(path)
        doc.set_origin(key)
        return doc
