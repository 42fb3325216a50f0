"""Tests for topology validation against the bundled catalog.

Uses the sensor-node fixture as the primary test case:
  - USB 5V → Buck → MCU / Sensor power rails
  - MCU ─I2C─ Sensor bus, with and without the pull-up module

Validates:
  - Structural failures short-circuit later checks
  - Kind, voltage, direction and bus rules
  - The single topology-wide I2C pull-up warning
  - Determinism of issue lists and ids
  - Parsing of the editor's JSON
"""

from __future__ import annotations

import json
import unittest
from dataclasses import replace

from circuitmind.catalog import (
    CatalogResult, ModuleCategory, ModuleDefinition, PortDirection, PowerPort, load_catalog,
)
from circuitmind.config import ValidationRules
from circuitmind.pipeline.topology import (
    Connection, ConnectionEnd, Severity, Topology, TopologyNode,
    has_blocking_issues, issue_to_dict, issues_to_dict, parse_topology, topology_to_dict,
    validate_topology,
)
from tests.sensor_fixture import make_sensor_topology, make_sensor_topology_json


CATALOG = load_catalog()


def _single(src: tuple[str, str, str], dst: tuple[str, str, str]) -> Topology:
    """Two nodes and one connection; each end is (node id, module id, port id)."""
    return Topology(
        nodes=(
            TopologyNode(id=src[0], module_id=src[1], label=src[0]),
            TopologyNode(id=dst[0], module_id=dst[1], label=dst[0]),
        ),
        connections=(
            Connection(
                id="c1",
                source=ConnectionEnd(node_id=src[0], port_id=src[2]),
                target=ConnectionEnd(node_id=dst[0], port_id=dst[2]),
            ),
        ),
    )


def _rails(v_from: float, v_to: float) -> CatalogResult:
    def module(mid: str, voltage: float, direction: PortDirection) -> ModuleDefinition:
        return ModuleDefinition(
            id=mid, name=mid, category=ModuleCategory.POWER,
            ports=(PowerPort(id="p", name="P", direction=direction, voltage_v=voltage),),
        )
    return CatalogResult(modules=(
        module("src", v_from, PortDirection.OUT),
        module("dst", v_to, PortDirection.IN),
    ))


class TestSensorTopology(unittest.TestCase):
    """End-to-end checks on the sensor-node fixture."""

    def test_only_pullup_warning_without_pullup(self):
        """A correctly wired sensor node only lacks I2C pull-ups."""
        issues = validate_topology(make_sensor_topology(), CATALOG)
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].rule, "i2c-pullup-missing")
        self.assertEqual(issues[0].id, "i2c-pullup-missing")
        self.assertIs(issues[0].severity, Severity.WARNING)
        self.assertFalse(has_blocking_issues(issues))

    def test_clean_with_pullup(self):
        """Adding the pull-up module leaves no issues."""
        self.assertEqual(validate_topology(make_sensor_topology(with_pullup=True), CATALOG), [])

    def test_usb_to_buck_has_no_issues(self):
        """USB 5V out → buck 5V in is a valid rail."""
        topo = _single(("a", "power_usb_5v", "pwr_5v_out"), ("b", "power_buck_3v3", "vin_5v"))
        self.assertEqual(validate_topology(topo, CATALOG), [])

    def test_usb_to_3v3_port_is_voltage_mismatch(self):
        """Wiring 5V into a 3.3V-only port is one voltage error."""
        topo = _single(("a", "power_usb_5v", "pwr_5v_out"), ("b", "mcu_esp32_wroom", "vdd_3v3"))
        issues = validate_topology(topo, CATALOG)
        self.assertEqual(len(issues), 1)
        issue = issues[0]
        self.assertEqual(issue.rule, "power-voltage-mismatch")
        self.assertIs(issue.severity, Severity.ERROR)
        self.assertEqual(issue.message, "Power voltage mismatch: 5V → 3.3V")
        self.assertEqual(issue.id, "power-voltage-mismatch:c1")
        self.assertEqual(issue.node_ids, ("a", "b"))
        self.assertEqual(issue.connection_id, "c1")
        self.assertTrue(has_blocking_issues(issues))

    def test_revalidation_is_identical(self):
        """Validating an unchanged topology twice gives identical output."""
        topo = make_sensor_topology()
        first = validate_topology(topo, CATALOG)
        second = validate_topology(topo, CATALOG)
        self.assertEqual(first, second)
        self.assertEqual(json.dumps(issues_to_dict(first)), json.dumps(issues_to_dict(second)))


class TestPowerRules(unittest.TestCase):
    """Voltage tolerance and power-flow direction."""

    def test_within_tolerance(self):
        """Rails 5 mV apart are the same rail."""
        topo = _single(("a", "src", "p"), ("b", "dst", "p"))
        self.assertEqual(validate_topology(topo, _rails(3.3, 3.305)), [])

    def test_outside_tolerance(self):
        """Rails 20 mV apart yield exactly one mismatch."""
        topo = _single(("a", "src", "p"), ("b", "dst", "p"))
        issues = validate_topology(topo, _rails(3.3, 3.32))
        self.assertEqual([i.rule for i in issues], ["power-voltage-mismatch"])

    def test_custom_tolerance(self):
        """The tolerance comes from the rules object."""
        topo = _single(("a", "src", "p"), ("b", "dst", "p"))
        loose = ValidationRules(voltage_tolerance_v=0.05)
        self.assertEqual(validate_topology(topo, _rails(3.3, 3.32), loose), [])

    def test_source_input_warns(self):
        """Power drawn from an 'in' port is a warning without node ids."""
        topo = _single(("a", "power_buck_3v3", "vin_5v"), ("b", "power_usb_5v", "pwr_5v_out"))
        issues = validate_topology(topo, CATALOG)
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].rule, "power-direction")
        self.assertIs(issues[0].severity, Severity.WARNING)
        self.assertEqual(issues[0].node_ids, ())
        self.assertFalse(has_blocking_issues(issues))

    def test_voltage_and_direction_both_fire(self):
        """A wrong-voltage connection from an input reports both issues."""
        topo = _single(("a", "mcu_esp32_wroom", "vdd_3v3"), ("b", "power_buck_3v3", "vin_5v"))
        issues = validate_topology(topo, CATALOG)
        self.assertEqual([i.rule for i in issues], ["power-voltage-mismatch", "power-direction"])


class TestStructuralRules(unittest.TestCase):
    """Missing entities and kind/bus mismatches."""

    def test_kind_mismatch_short_circuits(self):
        """Bus → power yields only a kind mismatch."""
        topo = _single(("a", "mcu_esp32_wroom", "i2c"), ("b", "sensor_bme280", "vdd_3v3"))
        issues = validate_topology(topo, CATALOG)
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].rule, "kind-mismatch")
        self.assertEqual(issues[0].message, "Port kind mismatch: bus → power")
        self.assertEqual(issues[0].node_ids, ("a", "b"))

    def test_bus_mismatch(self):
        """UART → I2C is a bus mismatch and not an I2C pairing."""
        topo = _single(("a", "mcu_esp32_wroom", "uart"), ("b", "sensor_bme280", "i2c"))
        issues = validate_topology(topo, CATALOG)
        self.assertEqual([i.rule for i in issues], ["bus-mismatch"])
        self.assertEqual(issues[0].message, "Bus type mismatch: uart → i2c")

    def test_missing_node(self):
        """A connection to an unknown node id."""
        topo = _single(("a", "power_usb_5v", "pwr_5v_out"), ("b", "power_buck_3v3", "vin_5v"))
        topo = replace(topo, nodes=topo.nodes[:1])
        issues = validate_topology(topo, CATALOG)
        self.assertEqual([i.rule for i in issues], ["missing-node"])
        self.assertEqual(issues[0].node_ids, ())
        self.assertIs(issues[0].severity, Severity.ERROR)
        self.assertEqual(issues[0].id, "missing-node:c1")
        self.assertEqual(issues[0].message,
                         "Connection references a non-existent module instance")

    def test_missing_module(self):
        """A node whose module is not in the catalog."""
        topo = _single(("a", "power_usb_5v", "pwr_5v_out"), ("b", "no_such_module", "vin_5v"))
        self.assertEqual([i.rule for i in validate_topology(topo, CATALOG)], ["missing-module"])

    def test_missing_port(self):
        """A port id the module does not have."""
        topo = _single(("a", "mcu_esp32_wroom", "i2c"), ("b", "sensor_bme280", "spi"))
        self.assertEqual([i.rule for i in validate_topology(topo, CATALOG)], ["missing-port"])

    def test_issues_follow_connection_order(self):
        """Per-connection issues keep input order; the I2C warning is last."""
        base = make_sensor_topology()
        bad = Connection(
            id="c_bad",
            source=ConnectionEnd(node_id="ghost", port_id="x"),
            target=ConnectionEnd(node_id="mcu", port_id="i2c"),
        )
        topo = replace(base, connections=(bad,) + base.connections)
        issues = validate_topology(topo, CATALOG)
        self.assertEqual([i.rule for i in issues], ["missing-node", "i2c-pullup-missing"])


class TestI2cPullup(unittest.TestCase):
    """The topology-wide pull-up heuristic."""

    def test_adding_pullup_removes_only_the_warning(self):
        """Other issues are unchanged when the pull-up is added."""
        base = make_sensor_topology()
        wrong = Connection(
            id="c_wrong",
            source=ConnectionEnd(node_id="usb", port_id="pwr_5v_out"),
            target=ConnectionEnd(node_id="sensor", port_id="vdd_3v3"),
        )
        without = replace(base, connections=base.connections + (wrong,))
        with_pullup = replace(without, nodes=make_sensor_topology(with_pullup=True).nodes)

        before = validate_topology(without, CATALOG)
        after = validate_topology(with_pullup, CATALOG)
        self.assertEqual([i.rule for i in before], ["power-voltage-mismatch", "i2c-pullup-missing"])
        self.assertEqual(after, before[:-1])

    def test_one_warning_for_many_i2c_links(self):
        """Several I2C connections still give a single warning."""
        base = make_sensor_topology()
        extra = Connection(
            id="c_i2c_2",
            source=ConnectionEnd(node_id="sensor", port_id="i2c"),
            target=ConnectionEnd(node_id="mcu", port_id="i2c"),
        )
        topo = replace(base, connections=base.connections + (extra,))
        issues = validate_topology(topo, CATALOG)
        self.assertEqual([i.rule for i in issues].count("i2c-pullup-missing"), 1)

    def test_custom_pullup_module(self):
        """The pull-up module id comes from the rules object."""
        rules = ValidationRules(i2c_pullup_module_id="sensor_bme280")
        self.assertEqual(validate_topology(make_sensor_topology(), CATALOG, rules), [])


class TestTopologyParsing(unittest.TestCase):
    """Editor JSON → Topology."""

    def test_camel_case_matches_fixture(self):
        """The editor JSON parses to the fixture topology."""
        self.assertEqual(parse_topology(make_sensor_topology_json()), make_sensor_topology())

    def test_snake_case_aliases(self):
        """snake_case keys and source/target are accepted."""
        topo = parse_topology({
            "nodes": [{"id": "a", "module_id": "power_usb_5v", "parent_id": "g1"}],
            "connections": [{"id": "c", "source": {"node_id": "a", "port_id": "p"},
                             "target": {"node_id": "b", "port_id": "q"}}],
        })
        self.assertEqual(topo.nodes[0].label, "a")
        self.assertEqual(topo.nodes[0].parent_id, "g1")
        self.assertEqual(topo.connections[0].target, ConnectionEnd(node_id="b", port_id="q"))

    def test_missing_module_id_raises(self):
        """A node without a module id is malformed."""
        with self.assertRaises(KeyError):
            parse_topology({"nodes": [{"id": "a"}]})

    def test_non_object_raises(self):
        """Only JSON objects are topologies."""
        with self.assertRaises(TypeError):
            parse_topology([])

    def test_serialization_round_trip(self):
        """topology_to_dict is the editor shape parse_topology reads."""
        topo = make_sensor_topology()
        self.assertEqual(parse_topology(topology_to_dict(topo)), topo)
        self.assertEqual(topology_to_dict(topo), make_sensor_topology_json())

    def test_issue_dict_omits_empty_fields(self):
        """Topology-wide issues have no nodeIds or connectionId."""
        issue = validate_topology(make_sensor_topology(), CATALOG)[0]
        self.assertEqual(issue_to_dict(issue), {
            "id": "i2c-pullup-missing",
            "rule": "i2c-pullup-missing",
            "severity": "warning",
            "message": "I2C connection detected; add the I2C Pull-up module",
        })


if __name__ == "__main__":
    unittest.main()
