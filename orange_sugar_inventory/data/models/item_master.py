"""
Item master and bundle models.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

# Result actions
ACTION_CREATED = "created"
ACTION_EXISTED = "existed"
ACTION_ADDED_TO_MASTER = "added_to_master"


@dataclass
class IndividualProduct:
    """
    One product picked as part of a bundle.
    """
    category_id: str
    category_code: str
    print_id: str
    print_code: str
    print_name: str
    quantity: int = 1
    category_name: Optional[str] = None


@dataclass
class BundleReferenceRow:
    """
    One component row of a precomputed bundle SKU.
    """
    product_code: str
    component_product_code: Optional[str] = None
    id: Optional[str] = None
    category_code: Optional[str] = None
    name: Optional[str] = None
    length_mm: Optional[float] = None
    width_mm: Optional[float] = None
    height_mm: Optional[float] = None
    weight_gms: Optional[float] = None
    isbn: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    brand: Optional[str] = None
    hsn_code: Optional[str] = None
    cost_price: Optional[float] = None
    mrp: Optional[float] = None
    base_price: Optional[float] = None
    enabled: Optional[bool] = None
    type: Optional[str] = None
    internal_style_name: Optional[str] = None
    component_quantity: Optional[int] = None
    component_price: Optional[float] = None
    tax_calculation_type: Optional[str] = None
    material: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "BundleReferenceRow":
        """
        Build a row from a database or CSV record, ignoring unknown keys.
        """
        names = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in record.items() if key in names})


@dataclass
class ExistingBundle:
    """
    A bundle found in the reference table for one size.
    """
    product_code: str
    size_name: str
    components: List[BundleReferenceRow] = field(default_factory=list)


@dataclass
class ReferenceCheck:
    """
    Outcome of looking up a bundle selection in the reference table.
    """
    existing_bundles: List[ExistingBundle] = field(default_factory=list)
    missing_bundles: List[str] = field(default_factory=list)  # "category | prints | size"

    @property
    def exists(self) -> bool:
        return not self.missing_bundles

    @property
    def unavailable_sizes(self) -> List[str]:
        return [entry.split(" | ")[-1] for entry in self.missing_bundles]


@dataclass
class RowResult:
    """
    Outcome of writing one item master or bundle row.
    """
    product_code: str
    error: Optional[str] = None
    action: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class GenerationResult:
    """
    Collected outcomes of an item master run.
    """
    results: List[RowResult] = field(default_factory=list)

    def add(self, product_code: str, error: Optional[str] = None, action: Optional[str] = None) -> None:
        self.results.append(RowResult(product_code=product_code, error=error, action=action))

    def merge(self, other: "GenerationResult") -> "GenerationResult":
        self.results.extend(other.results)
        return self

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def created_count(self) -> int:
        return sum(1 for r in self.results if r.action == ACTION_CREATED and r.ok)

    @property
    def existed_count(self) -> int:
        return sum(1 for r in self.results if r.action == ACTION_EXISTED)

    @property
    def added_to_master_count(self) -> int:
        return sum(1 for r in self.results if r.action == ACTION_ADDED_TO_MASTER and r.ok)
