"""
Sample value generation from JSON Schema and OpenAPI schemas.

A single traversal serves two output modes. In JSON mode samples are plain
Python values. In XML mode (``respect_xml``) samples are ``XmlElement`` nodes
shaped by the schemas' ``xml`` metadata, which ``create_xml_example``
serializes to a string.

Schemas are expected to be resolved already; ``$ref`` is not followed.
"""

# pylint: disable=too-many-arguments, too-many-locals, too-many-branches, too-many-statements, too-many-return-statements, line-too-long

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from samplize.common import MISSING, has_type, is_number, js_typeof, number_text, parse_json_text, strip_resolved_refs
from samplize.config import SampleConfig
from samplize.constraints import PropertyBudget, apply_item_constraints, apply_number_constraints, apply_string_constraints
from samplize.primitives import primitive
from samplize.schema_normalizer import discriminator_value, infer_type, is_visible, lift_composition, lift_schema
from samplize.xmlnode import XmlElement, render_xml

logger = logging.getLogger(__name__)

# Maximum nesting of schemas walked in one call
MAX_SAMPLE_DEPTH = 64

NO_TAG_NAME = 'notagname'
ADDITIONAL_PROPERTY_PREFIX = 'additionalProp'
ANYTHING_PLACEHOLDER = 'Anything can be here'


@dataclass
class _Node:
    """The normalized view of one schema level."""
    schema: Optional[Dict[str, Any]]
    schema_type: Any
    xml: Dict[str, Any]
    display_name: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def properties(self) -> Dict[str, Any]:
        if self.schema is None:
            return {}
        properties = self.schema.get('properties')
        return properties if isinstance(properties, dict) else {}


class SchemaSampler:
    """
    Walks a schema and synthesizes a sample for it.

    Attributes:
        config (SampleConfig): Visibility options for read-only and write-only properties.
        respect_xml (bool): Produce XML element trees instead of plain values.
        max_depth (int): Nesting depth beyond which ``None`` is produced.
    """

    def __init__(self, config: Optional[SampleConfig] = None, respect_xml: bool = False, max_depth: int = MAX_SAMPLE_DEPTH) -> None:
        self.config = config or SampleConfig()
        self.respect_xml = respect_xml
        self.max_depth = max_depth
        self._path: List[int] = []

    def sample(self, schema: Any, example_override: Any = MISSING, inherited_xml: Optional[Dict[str, Any]] = None, default_name: Optional[str] = None) -> Any:
        """
        Generate the sample for one schema level.

        Args:
            schema: The schema, or None.
            example_override: A literal to use instead of synthesizing, or ``MISSING``.
            inherited_xml: ``xml`` metadata to use when the schema has none (array items).
            default_name: Element name to use when the ``xml`` metadata has none.

        Returns:
            The sample, or None when there is nothing to sample.
        """
        if schema is True:
            schema = {}
        elif not isinstance(schema, dict):
            schema = None

        if schema is not None and id(schema) in self._path:
            logger.debug("Schema cycle detected at depth %d, stopping", len(self._path))
            return None
        if len(self._path) >= self.max_depth:
            logger.warning("Maximum sample depth (%d) exceeded", self.max_depth)
            return None

        self._path.append(id(schema))
        try:
            return self._sample(schema, example_override, inherited_xml, default_name)
        finally:
            self._path.pop()

    def _sample(self, schema: Optional[Dict[str, Any]], example_override: Any, inherited_xml: Optional[Dict[str, Any]], default_name: Optional[str]) -> Any:
        has_literal = example_override is not MISSING or (schema is not None and ('example' in schema or 'default' in schema))
        if schema is not None and not has_literal:
            schema, has_literal = lift_composition(schema, self.config)

        node = self._make_node(schema, has_literal, inherited_xml, default_name)

        if has_literal:
            return self._sample_literal(node, example_override)
        if has_type(node.schema_type, 'array'):
            return self._sample_array(node)
        if has_type(node.schema_type, 'object'):
            return self._sample_object(node)
        return self._sample_scalar(node)

    def _make_node(self, schema: Optional[Dict[str, Any]], has_literal: bool, inherited_xml: Optional[Dict[str, Any]], default_name: Optional[str]) -> _Node:
        own_xml = schema.get('xml') if schema is not None else None
        if isinstance(own_xml, dict):
            xml = dict(own_xml)
        else:
            xml = dict(inherited_xml or {})
        if not xml.get('name') and default_name:
            xml['name'] = default_name

        schema_type = None
        if schema is not None:
            schema_type = infer_type(schema, has_literal)
            if schema_type != schema.get('type'):
                schema = {**schema, 'type': schema_type}

        node = _Node(schema, schema_type, xml)
        if self.respect_xml:
            name = xml.get('name') or NO_TAG_NAME
            prefix = xml.get('prefix')
            namespace = xml.get('namespace')
            node.display_name = f"{prefix}:{name}" if prefix else name
            if namespace:
                node.attributes[f"xmlns:{prefix}" if prefix else 'xmlns'] = namespace
        return node

    def _item_hint(self, node: _Node) -> Dict[str, Any]:
        if not self.respect_xml:
            return {}
        return {'inherited_xml': node.xml, 'default_name': node.xml.get('name')}

    def _sample_literal(self, node: _Node, example_override: Any) -> Any:
        schema = node.schema
        if example_override is not MISSING:
            sample = example_override
        elif schema is not None and 'example' in schema:
            sample = schema['example']
        else:
            sample = schema.get('default') if schema is not None else None
        sample = strip_resolved_refs(sample)
        schema_type = node.schema_type

        if not self.respect_xml:
            if is_number(sample) and has_type(schema_type, 'string'):
                return number_text(sample)
            if not isinstance(sample, str) or has_type(schema_type, 'string'):
                return sample
            return parse_json_text(sample)

        if schema is None:
            schema_type = 'array' if isinstance(sample, list) else js_typeof(sample)

        if has_type(schema_type, 'array'):
            if not isinstance(sample, list):
                if isinstance(sample, str):
                    return sample
                sample = [sample]
            item_schema = schema.get('items') if schema is not None else None
            hint = self._item_hint(node) if item_schema is not None else {}
            items = [self.sample(item_schema, item, **hint) for item in sample]
            items = apply_item_constraints(items, schema or {})
            if node.xml.get('wrapped'):
                element = XmlElement(node.display_name, node.attributes, [])
                element.append(items)
                return element
            return items

        if has_type(schema_type, 'object'):
            if isinstance(sample, str):
                return sample
            element = XmlElement(node.display_name, node.attributes, [])
            budget = PropertyBudget(schema or {})
            if isinstance(sample, dict):
                properties = node.properties
                for name, value in sample.items():
                    prop = properties.get(name)
                    if isinstance(prop, dict):
                        if prop.get('readOnly') and not self.config.include_read_only:
                            continue
                        if prop.get('writeOnly') and not self.config.include_write_only:
                            continue
                        prop_xml = prop.get('xml')
                        if isinstance(prop_xml, dict) and prop_xml.get('attribute'):
                            node.attributes[prop_xml.get('name') or name] = value
                            budget.satisfy([name])
                            continue
                    self._add_xml_property(element, node, budget, name, value)
            return element

        return XmlElement(node.display_name, node.attributes, sample)

    def _sample_array(self, node: _Node) -> Any:
        items = node.schema.get('items')
        if not isinstance(items, dict):
            return []
        hint = self._item_hint(node)
        wrapped = bool(node.xml.get('wrapped'))

        samples = None
        for keyword in ('anyOf', 'oneOf'):
            alternatives = items.get(keyword)
            if isinstance(alternatives, list):
                samples = [
                    self.sample(lift_schema(items, alternative if isinstance(alternative, dict) else {}, self.config), **hint)
                    for alternative in alternatives
                ]
                break
        if samples is None:
            if self.respect_xml and not wrapped:
                return self.sample(items, **hint)
            samples = [self.sample(items, **hint)]

        samples = apply_item_constraints(samples, node.schema)
        if self.respect_xml and wrapped:
            element = XmlElement(node.display_name, node.attributes, [])
            element.append(samples)
            return element
        return samples

    def _sample_object(self, node: _Node) -> Any:
        schema = node.schema
        budget = PropertyBudget(schema)
        result: Any = XmlElement(node.display_name, node.attributes, []) if self.respect_xml else {}

        for name, prop in node.properties.items():
            if not is_visible(prop, self.config):
                continue
            if self.respect_xml:
                self._add_xml_property(result, node, budget, name)
            else:
                self._add_json_property(result, node, budget, name)

        if budget.exceeded():
            return result

        additional = schema.get('additionalProperties')
        if additional is True:
            if self.respect_xml:
                result.append(XmlElement(ADDITIONAL_PROPERTY_PREFIX, {}, ANYTHING_PLACEHOLDER))
            else:
                result[f'{ADDITIONAL_PROPERTY_PREFIX}1'] = {}
            budget.record(f'{ADDITIONAL_PROPERTY_PREFIX}1')
        elif isinstance(additional, dict):
            additional_sample = self.sample(additional)
            additional_xml = additional.get('xml')
            if (self.respect_xml and isinstance(additional_xml, dict)
                    and additional_xml.get('name') and additional_xml.get('name') != NO_TAG_NAME):
                result.append(additional_sample)
            else:
                for i in range(1, budget.additional_count() + 1):
                    if budget.exceeded():
                        return result
                    key = f'{ADDITIONAL_PROPERTY_PREFIX}{i}'
                    if self.respect_xml:
                        if isinstance(additional_sample, XmlElement):
                            result.append(additional_sample.renamed(key))
                        else:
                            result.append(XmlElement(key))
                    else:
                        result[key] = copy.deepcopy(additional_sample)
                    budget.record(key)
        return result

    def _add_json_property(self, result: Dict[str, Any], node: _Node, budget: PropertyBudget, name: str, example_override: Any = MISSING) -> None:
        if not budget.can_add(name):
            return
        value = discriminator_value(node.schema, name) if node.schema is not None else None
        if value is not None:
            result[name] = value
        else:
            result[name] = self.sample(node.properties.get(name), example_override)
        budget.record(name)

    def _add_xml_property(self, element: XmlElement, node: _Node, budget: PropertyBudget, name: str, example_override: Any = MISSING) -> None:
        prop = node.properties.get(name)
        default_name = None
        if isinstance(prop, dict):
            prop_xml = prop.get('xml')
            if isinstance(prop_xml, dict) and prop_xml.get('attribute'):
                node.attributes[prop_xml.get('name') or name] = self._attribute_value(prop)
                budget.satisfy([name])
                return
            child_schema = prop
            default_name = name
        elif node.schema is not None and node.schema.get('additionalProperties') is not False:
            child_schema = {'xml': {'name': name}}
        else:
            child_schema = None

        child = self.sample(child_schema, example_override, default_name=default_name)
        if not budget.can_add(name):
            return
        budget.record(name)
        element.append(child)

    @staticmethod
    def _attribute_value(prop: Dict[str, Any]) -> Any:
        if 'example' in prop:
            return prop['example']
        if 'default' in prop:
            return prop['default']
        enum = prop.get('enum')
        if isinstance(enum, list) and enum:
            return enum[0]
        return primitive(prop)

    def _sample_scalar(self, node: _Node) -> Any:
        schema = node.schema
        if schema is None:
            return None
        if 'const' in schema:
            value = schema['const']
        elif isinstance(schema.get('enum'), list):
            value = schema['enum'][0] if schema['enum'] else None
        else:
            value = primitive(schema)
            if is_number(value):
                value = apply_number_constraints(value, schema)
            if isinstance(value, str):
                value = apply_string_constraints(value, schema)

        if self.respect_xml:
            return XmlElement(node.display_name, node.attributes, value)
        return value


def sample_from_schema_generic(schema: Any, config: Any = None, example_override: Any = MISSING, respect_xml: bool = False) -> Any:
    """
    Generate a sample for a schema.

    Args:
        schema: The resolved schema, or None.
        config: A ``SampleConfig``, a mapping of options, or None.
        example_override: A literal to use instead of the schema's own, or ``MISSING``.
        respect_xml (bool): Produce ``XmlElement`` trees instead of plain values.

    Returns:
        The sample. None if no schema and no override is given.
    """
    sampler = SchemaSampler(SampleConfig.from_value(config), respect_xml)
    return sampler.sample(schema, example_override)


def sample_from_schema(schema: Any, config: Any = None, example_override: Any = MISSING) -> Any:
    """Generate a JSON sample for a schema."""
    return sample_from_schema_generic(schema, config, example_override, False)


def create_xml_example(schema: Any, config: Any = None, example_override: Any = MISSING) -> Optional[str]:
    """
    Generate an XML sample for a schema and serialize it.

    Returns:
        Optional[str]: The XML document, a literal string example as-is, or None.
    """
    sample = sample_from_schema_generic(schema, config, example_override, True)
    if sample is None or sample == '':
        return None
    if isinstance(sample, str):
        return sample
    if not isinstance(sample, (XmlElement, list)):
        return None
    return render_xml(sample)
