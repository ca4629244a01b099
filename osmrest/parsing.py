from lxml import etree

# Children that always come back as lists, even when there's only one.
SEQUENCE_TAGS = ('tag', 'nd', 'member')

ATTRIBUTE_PREFIX = '_'
TEXT_KEY = '__text'


def as_list(value):
    """Normalize a converted child (missing, single or repeated) to a list."""
    if value is None:
        return []
    elif isinstance(value, list):
        return value
    else:
        return [value]

def maybeText(value):
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)

def readState(state_file, sep='='):
    state = {}

    for line in state_file:
        if line.startswith('---'):
            continue
        if not line.strip() or line[0] == '#':
            continue
        (k, v) = line.split(sep, 1)
        state[k.strip()] = v.strip().replace("\\:", ":")

    return state

def writeState(state_file, state, sep='='):
    for k in sorted(state):
        state_file.write('%s%s%s\n' % (k, sep, state[k].replace(":", "\\:")))

def _element_to_object(elem):
    obj = {}

    for k, v in elem.attrib.items():
        obj[ATTRIBUTE_PREFIX + k] = v

    for child in elem:
        if not isinstance(child.tag, str):
            # Comments and processing instructions
            continue

        value = _element_to_object(child)
        if child.tag in SEQUENCE_TAGS:
            obj.setdefault(child.tag, []).append(value)
        elif child.tag in obj:
            existing = obj[child.tag]
            if not isinstance(existing, list):
                obj[child.tag] = [existing]
            obj[child.tag].append(value)
        else:
            obj[child.tag] = value

    text = (elem.text or '').strip()
    if text:
        if not obj:
            return text
        obj[TEXT_KEY] = text

    return obj

def element_to_object(elem):
    """Convert an lxml element into the nested dict form, keyed by its tag."""
    return {elem.tag: _element_to_object(elem)}

def xml_to_object(raw):
    """Convert an XML document (bytes or str) into nested dicts.

    The API answers some calls with plain text instead of XML (the id of a
    new changeset or element, the new version after a delete). Those come
    back as the stripped text, and an empty body comes back as None.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.encode('utf-8')

    stripped = raw.strip()
    if not stripped:
        return None
    if not stripped.startswith(b'<'):
        return stripped.decode('utf-8')

    return element_to_object(etree.fromstring(stripped))

def dom_to_object(dom):
    """Convert whatever an OAuth handle hands back into nested dicts.

    Accepts an lxml element or tree, a requests.Response (or anything else
    with a ``content`` attribute), or the raw body.
    """
    if hasattr(dom, 'getroot'):
        dom = dom.getroot()

    if etree.iselement(dom):
        return element_to_object(dom)
    elif hasattr(dom, 'content'):
        return xml_to_object(dom.content)
    elif dom is None or isinstance(dom, (bytes, str)):
        return xml_to_object(dom)
    else:
        raise TypeError("Can't convert %s to an OSM object" % type(dom).__name__)

def _build_element(elem, value):
    if isinstance(value, dict):
        for k, v in value.items():
            if k == TEXT_KEY:
                elem.text = maybeText(v)
            elif k.startswith(ATTRIBUTE_PREFIX):
                if v is not None:
                    elem.set(k[len(ATTRIBUTE_PREFIX):], maybeText(v))
            else:
                for item in as_list(v):
                    _build_element(etree.SubElement(elem, k), item)
    elif value is not None:
        elem.text = maybeText(value)

def object_to_element(obj):
    if not isinstance(obj, dict) or len(obj) != 1:
        raise ValueError("An OSM object needs exactly one root element, got %r" % (obj,))

    (tag, value) = next(iter(obj.items()))
    root = etree.Element(tag)
    _build_element(root, value)
    return root

def object_to_xml(obj):
    """Serialize the nested dict form back into an XML document (bytes)."""
    return etree.tostring(object_to_element(obj), encoding='UTF-8', xml_declaration=True)
