import io

import pytest
from lxml import etree

from osmrest.parsing import (
    as_list, dom_to_object, object_to_xml, readState, writeState, xml_to_object
)

NODE_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="test">
  <node id="42" version="3" changeset="7" lat="51.5" lon="-0.1">
    <tag k="amenity" v="bench"/>
  </node>
</osm>"""


def test_attributes_are_prefixed():
    data = xml_to_object(NODE_XML)
    node = data['osm']['node']
    assert data['osm']['_version'] == '0.6'
    assert node['_id'] == '42'
    assert node['_lat'] == '51.5'


def test_tags_are_always_a_list():
    data = xml_to_object(NODE_XML)
    assert data['osm']['node']['tag'] == [{'_k': 'amenity', '_v': 'bench'}]


def test_repeated_children_become_a_list():
    data = xml_to_object(b'<osm><changeset id="1"/><changeset id="2"/></osm>')
    assert [c['_id'] for c in data['osm']['changeset']] == ['1', '2']


def test_single_child_stays_an_object():
    data = xml_to_object(b'<osm><user id="5" display_name="me"/></osm>')
    assert data['osm']['user'] == {'_id': '5', '_display_name': 'me'}


def test_text_only_elements_become_strings():
    data = xml_to_object(b'<osm><note lat="1" lon="2"><id>9</id><status>open</status></note></osm>')
    assert data['osm']['note']['id'] == '9'
    assert data['osm']['note']['status'] == 'open'


def test_text_next_to_attributes():
    data = xml_to_object(b'<osm><description lang="en">hello</description></osm>')
    assert data['osm']['description'] == {'_lang': 'en', '__text': 'hello'}


def test_plain_text_reply():
    assert xml_to_object(b'  12345\n') == '12345'
    assert xml_to_object('7') == '7'


def test_empty_reply():
    assert xml_to_object(b'') is None
    assert xml_to_object(None) is None


def test_str_with_declaration():
    data = xml_to_object(NODE_XML.decode('utf-8'))
    assert data['osm']['node']['_id'] == '42'


def test_malformed_xml_raises():
    with pytest.raises(etree.XMLSyntaxError):
        xml_to_object(b'<osm><node></osm>')


def test_dom_to_object_from_element():
    root = etree.fromstring(NODE_XML)
    assert dom_to_object(root) == xml_to_object(NODE_XML)
    assert dom_to_object(etree.ElementTree(root)) == xml_to_object(NODE_XML)


def test_dom_to_object_from_response_like():
    class Response(object):
        content = NODE_XML

    assert dom_to_object(Response())['osm']['node']['_id'] == '42'


def test_dom_to_object_rejects_unknown():
    with pytest.raises(TypeError):
        dom_to_object(42)


def test_object_to_xml_changeset():
    xml = object_to_xml({'osm': {'changeset': {'tag': [
        {'_k': 'created_by', '_v': 'me'},
        {'_k': 'comment', '_v': 'a & b'},
    ]}}})
    root = etree.fromstring(xml)
    tags = root.findall('changeset/tag')
    assert [(t.get('k'), t.get('v')) for t in tags] == [('created_by', 'me'), ('comment', 'a & b')]


def test_object_to_xml_way_refs_and_bools():
    xml = object_to_xml({'osm': {'way': {
        '_changeset': 12,
        '_visible': True,
        'nd': [{'_ref': '1'}, {'_ref': '2'}],
    }}})
    way = etree.fromstring(xml).find('way')
    assert way.get('changeset') == '12'
    assert way.get('visible') == 'true'
    assert [nd.get('ref') for nd in way.findall('nd')] == ['1', '2']


def test_object_to_xml_needs_one_root():
    with pytest.raises(ValueError):
        object_to_xml({'a': {}, 'b': {}})


def test_converted_document_reads_back():
    data = xml_to_object(NODE_XML)
    assert xml_to_object(object_to_xml(data)) == data


def test_as_list():
    assert as_list(None) == []
    assert as_list({'a': 1}) == [{'a': 1}]
    assert as_list([1, 2]) == [1, 2]


def test_state_file_format():
    out = io.StringIO()
    writeState(out, {'credentials': 'bWU6cGFzcw==', 'url': 'http://x'})
    assert out.getvalue() == 'credentials=bWU6cGFzcw==\nurl=http\\://x\n'

    state = readState(io.StringIO('# comment\n\n' + out.getvalue()))
    assert state == {'credentials': 'bWU6cGFzcw==', 'url': 'http://x'}
