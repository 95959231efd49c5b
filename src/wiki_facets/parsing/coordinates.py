# ABOUTME: Coordinate extraction from infobox fields ({{coord}} templates or split d/m/s fields)
# ABOUTME: Returns decimal-degree Coordinates, or None when the infobox carries no usable location

from collections.abc import Mapping

import mwparserfromhell

from wiki_facets.core.models import Coordinates, FieldValue

COORD_KEYS = ("coordinates", "coords", "coord")

# Deprecated split fields, in (degrees, minutes, seconds, hemisphere) order
LAT_KEYS = (("latd", "latm", "lats", "latNS"), ("lat_d", "lat_m", "lat_s", "lat_NS"))
LON_KEYS = (("longd", "longm", "longs", "longEW"), ("long_d", "long_m", "long_s", "long_EW"))

HEMISPHERES = {"N": 1, "S": -1, "E": 1, "W": -1}


def _float(value: FieldValue | None) -> float | None:
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or value == "":
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def dms_to_decimal(degrees: float, minutes: float = 0.0, seconds: float = 0.0, hemisphere: str | None = None) -> float:
    """Convert degrees/minutes/seconds plus an optional N/S/E/W letter to signed decimal degrees."""
    sign = -1 if degrees < 0 else 1
    value = abs(degrees) + minutes / 60 + seconds / 3600
    if hemisphere:
        sign *= HEMISPHERES.get(hemisphere.strip().upper()[:1], 1)
    return round(sign * value, 6)


def _split_dms(args: list[str]) -> tuple[list[str], str | None, list[str]]:
    """Cut positional args at the first hemisphere letter: (parts, letter, rest)."""
    for i, arg in enumerate(args):
        if arg.upper() in HEMISPHERES:
            return args[:i], arg, args[i + 1 :]
    return args, None, []


def _dms(parts: list[str], hemisphere: str | None) -> float | None:
    numbers = [_float(p) for p in parts[:3]]
    if not numbers or numbers[0] is None or any(n is None for n in numbers):
        return None
    return dms_to_decimal(*numbers, hemisphere=hemisphere)  # type: ignore[arg-type]


def parse_coord_template(text: str) -> Coordinates | None:
    """Parse the first ``{{coord|...}}`` template found in ``text``."""
    code = mwparserfromhell.parse(text)
    for template in code.filter_templates():
        if not str(template.name).strip().lower().startswith("coord"):
            continue
        args = [str(p.value).strip() for p in template.params if not p.showkey]

        lat_parts, lat_hemi, rest = _split_dms(args)
        if lat_hemi is None:
            # Decimal form: {{coord|51.5|-0.12|...}}
            padded = args + ["", ""]
            lat, lon = _float(padded[0]), _float(padded[1])
        else:
            lon_parts, lon_hemi, _ = _split_dms(rest)
            lat = _dms(lat_parts, lat_hemi)
            lon = _dms(lon_parts, lon_hemi)

        if lat is None or lon is None:
            return None
        return Coordinates(lat=lat, lon=lon)
    return None


def _split_fields(fields: Mapping[str, FieldValue], key_sets) -> float | None:
    for degrees_key, minutes_key, seconds_key, hemisphere_key in key_sets:
        degrees = _float(fields.get(degrees_key))
        if degrees is None:
            continue
        hemisphere = fields.get(hemisphere_key)
        if isinstance(hemisphere, list):
            hemisphere = hemisphere[0] if hemisphere else None
        return dms_to_decimal(
            degrees,
            _float(fields.get(minutes_key)) or 0.0,
            _float(fields.get(seconds_key)) or 0.0,
            hemisphere,
        )
    return None


def parse_coordinates(fields: Mapping[str, FieldValue]) -> Coordinates | None:
    """Coordinates from infobox fields, or None."""
    for key in COORD_KEYS:
        value = fields.get(key)
        if isinstance(value, list):
            value = value[0] if value else None
        if value:
            coordinates = parse_coord_template(value)
            if coordinates is not None:
                return coordinates

    lat = _split_fields(fields, LAT_KEYS)
    lon = _split_fields(fields, LON_KEYS)
    if lat is None or lon is None:
        return None
    return Coordinates(lat=lat, lon=lon)
