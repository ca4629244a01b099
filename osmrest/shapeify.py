import logging

from shapely.geometry import Point, LineString, Polygon, MultiPolygon, mapping
from shapely.ops import polygonize

from osmrest.parsing import as_list

log = logging.getLogger('osmrest.shapeify')

polygon_way_tags = {
    'area': ('yes',),
    'building': None,
    'landuse': None,
    'natural': ('water', 'wood', 'scrub', 'wetland', 'grassland'),
    'leisure': ('park', 'pitch', 'garden'),
    'amenity': ('parking',),
}

def tags_of(thing):
    return dict((t['_k'], t['_v']) for t in as_list(thing.get('tag')))

def way_is_polygon(nds, tags):
    if len(nds) < 4 or nds[-1] != nds[0]:
        return False
    if tags.get('area') == 'no':
        return False

    for key, values in polygon_way_tags.items():
        if key not in tags or tags[key] == 'no':
            continue
        if values is None or tags[key] in values:
            return True

    return False

def multipolygon_shape(parts):
    # Polygonize will return all the polygons created, so the
    # inner parts of the multipolygons will be returned twice.
    # Drop any polygon that lies inside another one's outer ring.
    polygons = list(polygonize(parts))
    outers = [p for p in polygons
              if not any(o is not p and Polygon(o.exterior).contains(p) for o in polygons)]

    if not outers:
        return None
    elif len(outers) == 1:
        return outers[0]
    else:
        return MultiPolygon(outers)

def feature(kind, thing, shape, tags):
    properties = dict(tags)
    for attr in ('version', 'changeset', 'user', 'uid', 'timestamp'):
        if '_' + attr in thing:
            properties['@' + attr] = thing['_' + attr]

    return {
        'type': 'Feature',
        'id': '%s/%s' % (kind, thing['_id']),
        'properties': properties,
        'geometry': mapping(shape),
    }

def get_shapes(osm):
    """Build (kind, element, shape, tags) tuples for everything drawable in
    an ``{'osm': {...}}`` object."""

    root = osm.get('osm') or {}
    shapes = []
    node_cache = {}
    way_cache = {}

    for thing in as_list(root.get('node')):
        pt = (float(thing['_lon']), float(thing['_lat']))
        node_cache[thing['_id']] = pt

        tags = tags_of(thing)
        if tags:
            shapes.append(('node', thing, Point(pt), tags))

    for thing in as_list(root.get('way')):
        nds = [nd['_ref'] for nd in as_list(thing.get('nd'))]
        points = []
        for nd in nds:
            node_loc = node_cache.get(nd)
            if node_loc is None:
                raise ValueError("Way %s references node %s which is not in the data." % (thing['_id'], nd))
            points.append(node_loc)

        way_cache[thing['_id']] = points

        if len(points) < 2:
            continue

        tags = tags_of(thing)
        if way_is_polygon(nds, tags):
            shape = Polygon(points)
        else:
            shape = LineString(points)

        if tags:
            # Only include tagged things at this point. Otherwise,
            # the shapes that are part of multipolygon relations
            # will be included twice.
            shapes.append(('way', thing, shape, tags))

    for thing in as_list(root.get('relation')):
        tags = tags_of(thing)
        if tags.get('type') != 'multipolygon':
            continue

        parts = []
        for member in as_list(thing.get('member')):
            if member.get('_type') != 'way':
                continue
            points = way_cache.get(member['_ref'])
            if not points:
                # /map only returns the relation, not all of its members
                log.debug("Skipping relation %s, way %s is not in the data", thing['_id'], member['_ref'])
                parts = None
                break
            parts.append(LineString(points))

        if not parts:
            continue

        shape = multipolygon_shape(parts)
        if shape is not None:
            shapes.append(('relation', thing, shape, tags))

    return shapes

def object_to_geojson(osm):
    """Convert an ``{'osm': {...}}`` object into a GeoJSON FeatureCollection."""
    return {
        'type': 'FeatureCollection',
        'features': [feature(kind, thing, shape, tags) for (kind, thing, shape, tags) in get_shapes(osm)],
    }
