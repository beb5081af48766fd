"""Object graph for resource models, interfaces and operations.

All entities compare and hash by identity, so two models sharing a name in
different namespaces stay distinct.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class FieldType(str, Enum):
    """Scalar types a model field can declare"""
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    UTC_DATETIME = "utcDateTime"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "FieldType":
        """Map a declared type name to a FieldType, UNKNOWN when unrecognized"""
        for member in cls:
            if member.value == value:
                return member
        return cls.UNKNOWN


class OperationKind(str, Enum):
    """Semantic category of an operation"""
    READ = "read"
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_OR_REPLACE = "createOrReplace"
    CUSTOM_ACTION = "customAction"
    COLLECTION_ACTION = "collectionAction"


# Kinds that can appear on a standard resource-operation tag.
STANDARD_KINDS = (
    OperationKind.READ,
    OperationKind.LIST,
    OperationKind.CREATE,
    OperationKind.UPDATE,
    OperationKind.DELETE,
    OperationKind.CREATE_OR_REPLACE,
)


@dataclass(frozen=True)
class ResourceMetadata:
    """Type identifier plus singular and plural names of a resource"""

    type: str
    singular: str
    plural: str


@dataclass(eq=False)
class ModelField:
    """A named field on a model"""

    name: str
    type: FieldType = FieldType.STRING
    key: bool = False
    example: Any = None  # Declared example, takes precedence when set
    doc: Optional[str] = None

    @property
    def has_example(self) -> bool:
        return self.example is not None


@dataclass(eq=False)
class Model:
    """A schema model, possibly annotated as a resource"""

    name: str
    namespace: str = ""
    fields: List[ModelField] = field(default_factory=list)
    parent: Optional["Model"] = None
    doc: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def get_field(self, name: str) -> Optional[ModelField]:
        """Return field by exact name"""
        for model_field in self.fields:
            if model_field.name == name:
                return model_field
        return None

    def key_fields(self) -> List[ModelField]:
        return [f for f in self.fields if f.key]

    def __repr__(self) -> str:
        return f"Model({self.qualified_name!r})"


@dataclass(frozen=True)
class ResourceOperation:
    """Standard resource-operation tag: which kind, on which model"""

    kind: OperationKind
    resource: Model


@dataclass(frozen=True)
class ActionDetails:
    """Custom action tag (item-scoped or collection-scoped)"""

    name: str


@dataclass(eq=False)
class Operation:
    """A single operation, optionally grouped into an interface"""

    name: str
    resource_operation: Optional[ResourceOperation] = None
    action: Optional[ActionDetails] = None
    collection_action: Optional[ActionDetails] = None
    summary: Optional[str] = None  # Authored summary, never overwritten
    parameters: List[ModelField] = field(default_factory=list)
    return_models: List[Model] = field(default_factory=list)
    interface: Optional["OperationInterface"] = None

    @property
    def qualified_name(self) -> str:
        if self.interface is not None:
            return f"{self.interface.qualified_name}.{self.name}"
        return self.name

    def get_parameter(self, name: str) -> Optional[ModelField]:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def __repr__(self) -> str:
        return f"Operation({self.qualified_name!r})"


@dataclass(eq=False)
class OperationInterface:
    """Group of operations on one resource, possibly a template instance"""

    name: str
    operations: List[Operation] = field(default_factory=list)
    namespace: str = ""
    source_template: Optional[str] = None

    def __post_init__(self):
        for operation in self.operations:
            operation.interface = self

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def get_operation(self, name: str) -> Optional[Operation]:
        """Return operation by name"""
        for operation in self.operations:
            if operation.name == name:
                return operation
        return None

    def add_operation(self, operation: Operation) -> Operation:
        operation.interface = self
        self.operations.append(operation)
        return operation


@dataclass(eq=False)
class Namespace:
    """Container of models, interfaces, loose operations and sub-namespaces"""

    name: str
    models: List[Model] = field(default_factory=list)
    interfaces: List[OperationInterface] = field(default_factory=list)
    operations: List[Operation] = field(default_factory=list)
    namespaces: List["Namespace"] = field(default_factory=list)

    def walk(self) -> Iterator["Namespace"]:
        """Yield this namespace and every nested one, depth first"""
        yield self
        for child in self.namespaces:
            yield from child.walk()

    def all_models(self) -> List[Model]:
        return [m for ns in self.walk() for m in ns.models]

    def all_interfaces(self) -> List[OperationInterface]:
        return [i for ns in self.walk() for i in ns.interfaces]

    def all_operations(self) -> List[Operation]:
        """Loose operations declared directly in any namespace"""
        return [o for ns in self.walk() for o in ns.operations]


@dataclass(eq=False)
class Service:
    """A service boundary rooted at a namespace"""

    title: str
    namespace: Namespace

    def __repr__(self) -> str:
        return f"Service({self.title!r})"


@dataclass
class ServiceGraph:
    """Every service known to one derivation run"""

    services: List[Service] = field(default_factory=list)


@dataclass
class OperationExample:
    """One example attached to an operation"""

    parameters: Optional[Dict[str, Any]] = None
    return_type: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, dropping absent parts"""
        result: Dict[str, Any] = {}
        if self.parameters is not None:
            result["parameters"] = self.parameters
        if self.return_type is not None:
            result["returnType"] = self.return_type
        return result
