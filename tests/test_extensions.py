import pytest

from conftest import make_activity, make_lap, make_trackpoint, wrap_activities
from tcxcodec import InvalidValue, RawExtension, deserialize
from tcxcodec.models.namespaces import ACTIVITY_EXTENSION_NS, TCX_NS
from tcxcodec.parsers.extensions import (
    LAP_EXTENSION,
    TRACKPOINT_EXTENSION,
    TRACKPOINT_RESOLVER,
)

AX = ACTIVITY_EXTENSION_NS


def first_trackpoint(document):
    return document.activities.activities[0].laps[0].tracks[0].trackpoints[0]


def parse_trackpoint_extensions(extensions_xml):
    body = f"<Extensions>{extensions_xml}</Extensions>"
    data = wrap_activities(make_activity(make_lap(f"<Track>{make_trackpoint(body=body)}</Track>")))
    return first_trackpoint(deserialize(data)).extensions


def test_resolver_matches_on_namespace_uri_not_prefix():
    assert TRACKPOINT_RESOLVER.resolve(f"{{{AX}}}TPX") is TRACKPOINT_EXTENSION
    assert TRACKPOINT_RESOLVER.resolve(f"{{{TCX_NS}}}TPX") is None
    assert TRACKPOINT_RESOLVER.resolve(f"{{{AX}}}LX") is None


def test_schema_field_lookup():
    assert LAP_EXTENSION.field_for(AX, "AvgWatts")[0] == "avg_watts"
    assert LAP_EXTENSION.field_for(TCX_NS, "AvgWatts") is None
    assert LAP_EXTENSION.field_for(AX, "Foo") is None


def test_speed_extension_decodes_to_typed_field():
    extensions = parse_trackpoint_extensions("<ns3:TPX><ns3:Speed>3.5</ns3:Speed></ns3:TPX>")
    assert extensions.speed_meters_per_second == 3.5
    assert extensions.watts is None
    assert extensions.raw == ()


def test_any_prefix_for_extension_namespace():
    extensions = parse_trackpoint_extensions(
        f'<x:TPX xmlns:x="{AX}"><x:Watts>216</x:Watts><x:RunCadence>82</x:RunCadence></x:TPX>'
    )
    assert extensions.watts == 216
    assert extensions.run_cadence == 82


def test_unknown_extension_element_is_kept_raw():
    extensions = parse_trackpoint_extensions("<Foo>42</Foo>")
    assert extensions.raw == (RawExtension(TCX_NS, "Foo", "42"),)
    assert extensions.speed_meters_per_second is None


def test_unknown_child_inside_tpx_is_kept_raw():
    extensions = parse_trackpoint_extensions(
        "<ns3:TPX><ns3:Speed>2.0</ns3:Speed><ns3:Foo>42</ns3:Foo></ns3:TPX>"
    )
    assert extensions.speed_meters_per_second == 2.0
    assert extensions.raw == (RawExtension(AX, "Foo", "42"),)


def test_nested_vendor_block_keeps_leaves_in_order():
    extensions = parse_trackpoint_extensions(
        '<v:Vendor xmlns:v="urn:example:vendor">'
        "<v:Stride>1.2</v:Stride><v:Group><v:Balance>51</v:Balance><v:Empty/></v:Group>"
        "</v:Vendor>"
    )
    assert extensions.raw == (
        RawExtension("urn:example:vendor", "Stride", "1.2"),
        RawExtension("urn:example:vendor", "Balance", "51"),
        RawExtension("urn:example:vendor", "Empty", ""),
    )


def test_invalid_typed_extension_value_is_an_error():
    with pytest.raises(InvalidValue) as excinfo:
        parse_trackpoint_extensions("<ns3:TPX><ns3:Watts>-20</ns3:Watts></ns3:TPX>")
    assert excinfo.value.field == "TPX.watts"
    assert "Trackpoint[0]/Extensions" in excinfo.value.path


def test_absent_extensions_are_empty():
    data = wrap_activities(make_activity(make_lap(f"<Track>{make_trackpoint()}</Track>")))
    extensions = first_trackpoint(deserialize(data)).extensions
    assert extensions.is_empty
    assert extensions.speed_meters_per_second is None


def test_zero_is_distinct_from_absent():
    extensions = parse_trackpoint_extensions("<ns3:TPX><ns3:Watts>0</ns3:Watts></ns3:TPX>")
    assert extensions.watts == 0
    assert not extensions.is_empty


def test_lap_extensions():
    lx = (
        "<Extensions><ns3:LX><ns3:AvgSpeed>3.1</ns3:AvgSpeed><ns3:Steps>410</ns3:Steps>"
        "<ns3:AvgRunCadence>84</ns3:AvgRunCadence><ns3:MaxRunCadence>90</ns3:MaxRunCadence>"
        "</ns3:LX></Extensions>"
    )
    data = wrap_activities(make_activity(make_lap(extra=lx)))
    lap = deserialize(data).activities.activities[0].laps[0]
    assert lap.extensions.avg_speed == 3.1
    assert lap.extensions.steps == 410
    assert lap.extensions.avg_run_cadence == 84
    assert lap.extensions.max_run_cadence == 90
    assert lap.extensions.avg_watts is None


def test_activity_extensions_are_raw_only():
    activity_xml = (
        '<Activity Sport="Other"><Id>2021-01-19T12:00:00Z</Id>'
        '<Extensions><v:Mood xmlns:v="urn:example:vendor">happy</v:Mood></Extensions>'
        "</Activity>"
    )
    activity = deserialize(wrap_activities(activity_xml)).activities.activities[0]
    assert activity.extensions == (RawExtension("urn:example:vendor", "Mood", "happy"),)


def test_text_of_vendor_container_is_kept_after_its_leaves():
    extensions = parse_trackpoint_extensions(
        '<v:Group xmlns:v="urn:example:vendor">abc<v:X>1</v:X></v:Group>'
    )
    assert extensions.raw == (
        RawExtension("urn:example:vendor", "X", "1"),
        RawExtension("urn:example:vendor", "Group", "abc"),
    )


def test_indentation_inside_vendor_container_is_not_kept():
    extensions = parse_trackpoint_extensions(
        '<v:Group xmlns:v="urn:example:vendor">\n    <v:X>1</v:X>\n  </v:Group>'
    )
    assert extensions.raw == (RawExtension("urn:example:vendor", "X", "1"),)
