"""Vehicle side of the catalog: manufacturers, models and vehicles (car types)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from tecdoc.coercion import to_int, to_month_date, to_str
from tecdoc.contracts import operations
from tecdoc.contracts.interfaces import CanonicalRecord
from tecdoc.entities.base import CatalogEntity, memoized

if TYPE_CHECKING:
    from tecdoc.catalog import Catalog

PASSENGER_CAR = 1
COMMERCIAL_VEHICLE = 2
LIGHT_COMMERCIAL = 3


def _selection_params(
    scope: dict,
    car_type: int,
    country_group_flag: bool,
    eval_favor: bool,
    favoured_list: Optional[int],
) -> dict:
    return {
        "car_type": car_type,
        "countries_car_selection": scope["country"],
        "country_group_flag": country_group_flag,
        "eval_favor": eval_favor,
        "favoured_list": favoured_list,
        "lang": scope["lang"],
    }


@dataclass
class VehicleManufacturer(CatalogEntity):
    id: int = 0
    name: str = ""

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "VehicleManufacturer":
        return cls(id=to_int(record.get("manu_id")), name=to_str(record.get("manu_name")))

    @classmethod
    def all(
        cls,
        catalog: "Catalog",
        car_type: int = PASSENGER_CAR,
        lang: Optional[str] = None,
        country: Optional[str] = None,
        country_group_flag: bool = False,
        eval_favor: bool = False,
        favoured_list: Optional[int] = None,
    ) -> List["VehicleManufacturer"]:
        """All vehicle manufacturers for a vehicle type.

        ``car_type``: 1 passenger car, 2 commercial vehicle, 3 light commercial.
        ``favoured_list`` narrows a simplified selection (1 first list, 0 the rest).
        """
        scope = catalog.scope(lang=lang, country=country)
        records = catalog.request(
            operations.VEHICLE_MANUFACTURERS,
            _selection_params(scope, car_type, country_group_flag, eval_favor, favoured_list),
        )
        return [cls.from_record(record).bind(catalog, scope) for record in records]

    @memoized
    def models(self) -> List["VehicleModel"]:
        return VehicleModel.all(
            self._require_catalog(),
            manu_id=self.id,
            lang=self.lang,
            country=self.country,
        )


@dataclass
class VehicleModel(CatalogEntity):
    id: int = 0
    name: str = ""
    date_of_construction_from: Optional[date] = None
    date_of_construction_to: Optional[date] = None

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "VehicleModel":
        return cls(
            id=to_int(record.get("model_id")),
            name=to_str(record.get("modelname")),
            date_of_construction_from=to_month_date(record.get("year_of_constr_from")),
            date_of_construction_to=to_month_date(record.get("year_of_constr_to")),
        )

    @classmethod
    def all(
        cls,
        catalog: "Catalog",
        manu_id: int,
        car_type: int = PASSENGER_CAR,
        lang: Optional[str] = None,
        country: Optional[str] = None,
        country_group_flag: bool = False,
        eval_favor: bool = False,
        favoured_list: Optional[int] = None,
    ) -> List["VehicleModel"]:
        scope = catalog.scope(lang=lang, country=country)
        params = _selection_params(scope, car_type, country_group_flag, eval_favor, favoured_list)
        params["manu_id"] = manu_id
        records = catalog.request(operations.VEHICLE_MODELS, params)
        return [cls.from_record(record).bind(catalog, scope) for record in records]


@dataclass
class Vehicle(CatalogEntity):
    """A concrete vehicle type (engine / body variant of a model)."""

    id: int = 0
    manufacturer_id: int = 0
    manufacturer_name: str = ""
    model_id: int = 0
    model_name: str = ""
    type_name: str = ""
    construction_type: str = ""
    fuel_type: str = ""
    power_kw: int = 0
    power_hp: int = 0
    cylinder_capacity: int = 0
    date_of_construction_from: Optional[date] = None
    date_of_construction_to: Optional[date] = None

    @classmethod
    def from_record(cls, record: CanonicalRecord) -> "Vehicle":
        # Details come nested under vehicleDetails; older responses are flat.
        details = record.get("vehicle_details")
        if not isinstance(details, CanonicalRecord):
            details = record
        return cls(
            id=to_int(record.get("car_id")),
            manufacturer_id=to_int(details.get("manu_id")),
            manufacturer_name=to_str(details.get("manu_name")),
            model_id=to_int(details.get("mod_id")),
            model_name=to_str(details.get("model_name")),
            type_name=to_str(details.get("type_name")),
            construction_type=to_str(details.get("construction_type")),
            fuel_type=to_str(details.get("fuel_type")),
            power_kw=to_int(details.get("power_kw_from")),
            power_hp=to_int(details.get("power_hp_from")),
            cylinder_capacity=to_int(details.get("ccm_tech")),
            date_of_construction_from=to_month_date(details.get("year_of_constr_from")),
            date_of_construction_to=to_month_date(details.get("year_of_constr_to")),
        )

    @classmethod
    def find_by_ids(
        cls,
        catalog: "Catalog",
        ids: Sequence[Any],
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> List["Vehicle"]:
        """Fetch vehicles by id, in batches of the service's id limit.

        Results keep the order of ``ids`` chunk by chunk and are not deduplicated.
        """
        scope = catalog.scope(lang=lang, country=country)
        records = catalog.fetch_by_ids(
            operations.VEHICLES_BY_IDS,
            ids,
            {
                "lang": scope["lang"],
                "country": scope["country"],
                "country_user_setting": scope["country"],
                "countries_car_selection": scope["country"],
            },
            id_field="car_ids",
        )
        return [cls.from_record(record).bind(catalog, scope) for record in records]
