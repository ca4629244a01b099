from osmrest import Api
import json
import sys

if len(sys.argv) < 2:
    sys.stderr.write('usage: %s left,bottom,right,top [api url]\n' % sys.argv[0])
    sys.exit(1)

if len(sys.argv) > 2:
    api = Api(sys.argv[2])
else:
    api = Api()

collection = api.get_map_geojson(sys.argv[1])

json.dump(collection, sys.stdout, indent=2)
sys.stdout.write('\n')
sys.stderr.write('%d features\n' % len(collection['features']))
