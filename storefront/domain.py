from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple, Union


class ProductType(str, Enum):
    COURSE = "course"
    DOWNLOAD = "download"
    ACADEMIC = "academic"


class CourseLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class AcademicFormat(str, Enum):
    PDF = "PDF"
    DOCX = "DOCX"
    PPT = "PPT"


class OrderStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"
    REFUNDED = "Refunded"


class UserRole(str, Enum):
    STUDENT = "student"
    VENDOR = "vendor"
    ADMIN = "admin"


@dataclass(frozen=True, kw_only=True)
class BaseProduct:
    id: str
    title: str
    description: str
    price: int  # whole rupees
    thumbnail: str
    rating: float
    reviews_count: int
    author: str
    tags: Tuple[str, ...]
    original_price: Optional[int] = None


@dataclass(frozen=True, kw_only=True)
class Course(BaseProduct):
    type: ClassVar[ProductType] = ProductType.COURSE

    duration: str
    lectures: int
    level: CourseLevel


@dataclass(frozen=True, kw_only=True)
class DigitalDownload(BaseProduct):
    type: ClassVar[ProductType] = ProductType.DOWNLOAD

    file_format: str
    file_size: str
    version: str


@dataclass(frozen=True, kw_only=True)
class AcademicResource(BaseProduct):
    type: ClassVar[ProductType] = ProductType.ACADEMIC

    grade: str
    subject: str
    format: AcademicFormat


Product = Union[Course, DigitalDownload, AcademicResource]


@dataclass(frozen=True)
class CartItem:
    product: Product
    cart_id: str

    @property
    def price(self) -> int:
        return self.product.price


@dataclass(frozen=True)
class Cart:
    id: str
    items: Tuple[CartItem, ...] = ()


@dataclass(frozen=True)
class Order:
    id: str
    date: str
    items: Tuple[CartItem, ...]
    total: int
    status: OrderStatus


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: UserRole
    avatar: str
    wallet_balance: int = 0


@dataclass(frozen=True)
class Event:
    id: str
    ts: str
    name: str
    payload: Dict
