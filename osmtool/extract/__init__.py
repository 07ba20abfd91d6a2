"""Extract regions (bounding box and polygon) and boundary file parsers."""