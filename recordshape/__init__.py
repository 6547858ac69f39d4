import importlib

mod = "recordshape"
class LazyLoader:
    """
    Lazy loader for the recordshape functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "infer_schema": (f"{mod}.schema_inference", "infer_schema"),
    "SchemaBuilder": (f"{mod}.schema_inference", "SchemaBuilder"),
    "InputShapeError": (f"{mod}.schema_inference", "InputShapeError"),
    "render_schema": (f"{mod}.renderers", "render_schema"),
    "register_renderer": (f"{mod}.renderers", "register_renderer"),
    "UnknownNotationError": (f"{mod}.renderers", "UnknownNotationError"),
    "convert_schema_to_rust": (f"{mod}.schematorust", "convert_schema_to_rust"),
    "convert_schema_to_typescript": (f"{mod}.schematots", "convert_schema_to_typescript"),
    "convert_json_to_declaration": (f"{mod}.jsontotypes", "convert_json_to_declaration"),
    "convert_json_to_rust": (f"{mod}.jsontotypes", "convert_json_to_rust"),
    "convert_json_to_typescript": (f"{mod}.jsontotypes", "convert_json_to_typescript"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
