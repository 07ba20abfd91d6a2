# osmtool

Building blocks for cutting extracts out of OpenStreetMap data: geometry
types, OSM objects and ID sets, tag matching, metadata cleaning, extract
regions and readers for boundary files.

## Modules

- `osmtool.geometry`
  - `Location`: fixed-point longitude/latitude (seven decimal places).
  - `Box`: a bounding box with `extend`, `valid` and `contains`.
  - `Area`: outer rings, each followed by its inner rings, with `num_rings`
    and `envelope`.
  - `Coordinates`: a plain float pair.
  - `calculate_double_area` and `is_ccw` for ring orientation.
- `osmtool.osm`
  - `Node`, `Way`, `Relation`, `Member`, `ItemType` and `EntityBits`.
  - `IdSets`: one ID set each for nodes, ways and relations.
  - `string_to_object_id`, `parse_and_add_id` and `read_id_file` read
    IDs such as `n123` or `w45`, one per line. Anything after a space or
    `#` is ignored.
  - `read_id_objects` and `add_nodes` collect IDs from objects.
- `osmtool.util`
  - `parse_bbox`, `parse_item_type`, `get_types` and
    `get_filter_expression` read command-line style values.
  - `get_string_matcher` returns `AlwaysTrue`, `Equal`, `Prefix`,
    `Substring` or `ListMatcher`.
  - `get_tag_matcher`, `TagMatcher`, `TagsFilter` and
    `initialize_tags_filter` match tags.
  - Small helpers: `get_filename_suffix`, `ends_with`, `file_size`,
    `file_size_sum`, `show_mbytes`, `show_gbytes`, `yes_no` and `warning`.
- `osmtool.option_clean`: `OptionClean` clears the chosen metadata
  attributes of objects. The attributes are `version`, `changeset`,
  `timestamp`, `uid` and `user`.
- `osmtool.errors`: `ArgumentError`, `ConfigError`, `GeoJSONError` and
  `PolyError`.
- `osmtool.extract.extract`: `ExtractBBox` and `ExtractPolygon`.
  - Each pairs an output name and a description with a region.
  - `contains(location)` tests whether a location lies in the region.
  - `geometry_as_text()` returns a `BOX(...)` string or a WKT
    `MULTIPOLYGON`.
  - Objects passed to `write` are batched. The batches go to a writer
    given to `open_file` (any object with `write(objects)` and `close()`),
    after the optional `OptionClean` has been applied.
- `osmtool.extract.poly_file_parser`: `PolyFileParser` reads `.poly`
  boundary files into an `Area`.
- `osmtool.extract.geojson_file_parser`: `GeoJSONFileParser` reads a
  `Polygon` or `MultiPolygon` GeoJSON `Feature` into an `Area`. For a
  `FeatureCollection` it reads the first feature.

## Example

```python
from osmtool.util import parse_bbox
from osmtool.extract.extract import ExtractBBox
from osmtool.geometry import Location

box = parse_bbox("10,10,20,20", "--bbox")
extract = ExtractBBox("out.osm", "my extract", box)
extract.contains(Location(15.0, 15.0))   # True
extract.geometry_as_text()               # "BOX(10 10,20 20)"
```

Reading a boundary and testing a location against it:

```python
from osmtool.extract.poly_file_parser import PolyFileParser
from osmtool.extract.extract import ExtractPolygon
from osmtool.geometry import Location

area = PolyFileParser("boundary.poly")()
outer, inner = area.num_rings()
extract = ExtractPolygon("out.osm", "boundary", area)
extract.contains(Location(10.5, 10.5))
```

Cleaning metadata:

```python
from osmtool.option_clean import OptionClean

clean = OptionClean()
clean.setup(["version", "user"])
str(clean)   # "version,user"
```

## What it does not do

- The package does not read or write OSM data files (XML, PBF, OPL). It
  works on objects that you build or load yourself.
- It offers no command-line program.
- It does not decide which nodes, ways and relations belong in an extract.
  It tests locations against regions and passes on the objects you write.

## Installation

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```