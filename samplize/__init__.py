import importlib

mod = "samplize"
class LazyLoader:
    """
    Lazy loader for the samplize functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item.startswith('__'):
            raise AttributeError(item)
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the public names and their corresponding module paths
_mappings = {
    "MISSING": (f"{mod}.common", "MISSING"),
    "SampleConfig": (f"{mod}.config", "SampleConfig"),
    "SchemaSampler": (f"{mod}.schema_sampler", "SchemaSampler"),
    "sample_from_schema_generic": (f"{mod}.schema_sampler", "sample_from_schema_generic"),
    "sample_from_schema": (f"{mod}.schema_sampler", "sample_from_schema"),
    "create_xml_example": (f"{mod}.schema_sampler", "create_xml_example"),
    "XmlElement": (f"{mod}.xmlnode", "XmlElement"),
    "SampleCache": (f"{mod}.sample_cache", "SampleCache"),
    "memoized_sample_from_schema": (f"{mod}.sample_cache", "memoized_sample_from_schema"),
    "memoized_create_xml_example": (f"{mod}.sample_cache", "memoized_create_xml_example"),
    "load_schema": (f"{mod}.schema_loader", "load_schema"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
