import threading
import time
from datetime import date

import pytest

from tecdoc.contracts import operations
from tecdoc.contracts.interfaces import CanonicalRecord
from tecdoc.entities import Article, Vehicle, VehicleManufacturer, VehicleModel
from tecdoc.entities.base import is_memoized
from tecdoc.errors import BatchFailure, TransportFailure


def make_article(catalog, **fields):
    values = {"id": 1285421, "name": "Termostats", "number": "31966", "brand_name": "FEBI BILSTEIN", "brand_number": 101}
    values.update(fields)
    return Article(**values).bind(catalog, {"lang": "lv", "country": "lv"})


# ---------------------------------------------------------------------------
# Eager fields
# ---------------------------------------------------------------------------

def test_article_from_record_coerces_fields():
    article = Article.from_record(CanonicalRecord({
        "article_id": "1285421",
        "article_name": "Termostats",
        "article_no": "31966",
        "article_search_no": "31966",
        "brand_name": "FEBI BILSTEIN",
        "brand_no": "101",
        "generic_article_id": "1000",
        "number_type": "0",
        "unknown_field": "ignored",
    }))

    assert article.id == 1285421
    assert article.brand_number == 101
    assert article.generic_article_id == 1000
    assert article.search_number == "31966"


def test_coercion_failures_default_instead_of_raising():
    article = Article.from_record(CanonicalRecord({"article_id": "n/a", "article_name": None}))

    assert article.id == 0
    assert article.name == ""
    assert article.number == ""


def test_vehicle_model_dates_come_from_year_month_values():
    model = VehicleModel.from_record(CanonicalRecord({
        "model_id": "5135",
        "modelname": "CIVIC VII Hatchback (EU, EP, EV)",
        "year_of_constr_from": "200009",
        "year_of_constr_to": "200512",
    }))

    assert model.id == 5135
    assert model.date_of_construction_from == date(2000, 9, 1)
    assert model.date_of_construction_to == date(2005, 12, 1)


@pytest.mark.parametrize("value", [None, "", "abcdef", "200013"])
def test_vehicle_model_invalid_dates_are_empty(value):
    model = VehicleModel.from_record(CanonicalRecord({"model_id": "1", "year_of_constr_to": value}))

    assert model.date_of_construction_to is None


def test_vehicle_reads_nested_details():
    vehicle = Vehicle.from_record(CanonicalRecord({
        "car_id": "18952",
        "vehicle_details": CanonicalRecord({
            "manu_id": "45",
            "manu_name": "HONDA",
            "model_name": "CIVIC VII",
            "type_name": "1.4 iS",
            "power_kw_from": "66",
            "power_hp_from": "90",
            "ccm_tech": "1396",
            "year_of_constr_from": "200102",
        }),
    }))

    assert vehicle.id == 18952
    assert vehicle.manufacturer_name == "HONDA"
    assert vehicle.power_kw == 66
    assert vehicle.cylinder_capacity == 1396
    assert vehicle.date_of_construction_from == date(2001, 2, 1)


def test_unbound_entity_can_not_fetch():
    article = Article(id=1)

    with pytest.raises(RuntimeError):
        article.documents


# ---------------------------------------------------------------------------
# Memoization
# ---------------------------------------------------------------------------

def test_derived_field_is_fetched_once(catalog, transport, make_response):
    transport.responses[operations.ARTICLE_DOCUMENTS] = make_response([
        {"docId": "900", "docFileName": "31966.jpg", "docTypeName": "Foto"},
    ])
    article = make_article(catalog)

    first = article.documents
    second = article.documents
    third = article.documents

    assert first is second is third
    assert first[0].id == 900
    assert len(transport.calls_for(operations.ARTICLE_DOCUMENTS)) == 1
    assert transport.calls_for(operations.ARTICLE_DOCUMENTS)[0] == {
        "provider": 123, "lang": "lv", "country": "lv", "article_id": 1285421,
    }


def test_memoization_is_per_instance(catalog, transport, make_response):
    transport.responses[operations.ARTICLE_THUMBNAILS] = make_response([{"thumbDocId": "1"}])

    make_article(catalog).thumbnails
    make_article(catalog).thumbnails

    assert len(transport.calls_for(operations.ARTICLE_THUMBNAILS)) == 2


def test_failed_computation_is_not_cached(catalog, transport, make_response):
    outcomes = [TransportFailure(operations.ARTICLE_DOCUMENTS, "timeout"), make_response([])]
    transport.responses[operations.ARTICLE_DOCUMENTS] = lambda body: outcomes.pop(0)
    article = make_article(catalog)

    with pytest.raises(TransportFailure):
        article.documents
    assert not is_memoized(article, "documents")

    assert article.documents == []
    assert len(transport.calls_for(operations.ARTICLE_DOCUMENTS)) == 2


def test_concurrent_first_access_issues_one_request(catalog, transport, make_response):
    def slow(body):
        time.sleep(0.05)
        return make_response([{"manuId": "45", "manuName": "HONDA"}])
    transport.responses[operations.ARTICLE_LINKED_MANUFACTURERS] = slow
    article = make_article(catalog)
    results = []

    threads = [threading.Thread(target=lambda: results.append(article.linked_manufacturers)) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(transport.calls_for(operations.ARTICLE_LINKED_MANUFACTURERS)) == 1
    assert all(result is results[0] for result in results)


def test_assigned_article_backs_attributes_ean_and_oe_numbers(catalog, transport, make_response):
    transport.responses[operations.ASSIGNED_ARTICLE] = make_response([{
        "articleAttributes": [{"attrName": "Atvēršanas temperatūra", "attrValue": "88", "attrUnit": "°C"}],
        "eanNumber": [{"eanNumber": "4027816319665"}],
        "oenNumbers": [{"brandName": "BMW", "oeNumber": "11537510959"}],
    }])
    article = make_article(catalog)

    assert article.ean_number == "4027816319665"
    assert article.oe_numbers[0].brand_name == "BMW"
    assert article.attributes[0].unit == "°C"
    assert len(transport.calls_for(operations.ASSIGNED_ARTICLE)) == 1


def test_missing_assigned_article_yields_empty_values(catalog, transport, make_response):
    transport.responses[operations.ASSIGNED_ARTICLE] = make_response([])
    article = make_article(catalog)

    assert article.ean_number == ""
    assert article.oe_numbers == []
    assert article.attributes == []


def test_brand_is_built_without_a_request(catalog, transport):
    brand = make_article(catalog).brand

    assert (brand.number, brand.name) == (101, "FEBI BILSTEIN")
    assert transport.calls == []


def test_manufacturer_models_are_memoized(catalog, transport, make_response):
    transport.responses[operations.VEHICLE_MODELS] = make_response([{"modelId": "5135", "modelname": "CIVIC VII"}])
    manufacturer = VehicleManufacturer(id=45, name="HONDA").bind(catalog, {"lang": "lv", "country": "lv"})

    assert manufacturer.models[0].name == "CIVIC VII"
    assert manufacturer.models[0].id == 5135
    calls = transport.calls_for(operations.VEHICLE_MODELS)
    assert len(calls) == 1
    assert calls[0]["manu_id"] == 45
    assert calls[0]["countries_car_selection"] == "lv"


# ---------------------------------------------------------------------------
# Linked vehicles: two-level fetch
# ---------------------------------------------------------------------------

def linked_targets(*ids):
    return [{"linkingTargetId": str(i), "linkingTargetType": "C"} for i in ids]


def test_linked_vehicle_ids_are_deduplicated_in_first_seen_order(catalog, transport, make_response):
    transport.responses[operations.ARTICLE_LINKED_TARGETS] = make_response(linked_targets(30, 10, 30, 20, 10))
    article = make_article(catalog)

    assert article.linked_vehicle_ids == [30, 10, 20]
    body = transport.calls_for(operations.ARTICLE_LINKED_TARGETS)[0]
    assert body["linking_target_id"] == -1
    assert body["linking_target_type"] == "C"


def test_linked_vehicles_are_fetched_in_batches_with_the_article_scope(catalog, transport, make_response):
    transport.responses[operations.ARTICLE_LINKED_TARGETS] = make_response(linked_targets(*range(1, 31)))
    transport.responses[operations.VEHICLES_BY_IDS] = lambda body: make_response(
        [{"carId": str(car_id)} for car_id in body["car_ids"]]
    )
    article = make_article(catalog)

    vehicles = article.linked_vehicles

    assert [v.id for v in vehicles] == list(range(1, 31))
    calls = transport.calls_for(operations.VEHICLES_BY_IDS)
    assert [len(body["car_ids"]) for body in calls] == [25, 5]
    assert all(body["lang"] == "lv" and body["countries_car_selection"] == "lv" for body in calls)


def test_stage_two_failure_keeps_stage_one_cached(catalog, transport, make_response):
    transport.responses[operations.ARTICLE_LINKED_TARGETS] = make_response(linked_targets(1, 2, 3))
    outcomes = [TransportFailure(operations.VEHICLES_BY_IDS, "HTTP 503"), None]

    def vehicles(body):
        outcome = outcomes.pop(0)
        return outcome or make_response([{"carId": str(car_id)} for car_id in body["car_ids"]])
    transport.responses[operations.VEHICLES_BY_IDS] = vehicles
    article = make_article(catalog)

    with pytest.raises(BatchFailure):
        article.linked_vehicles
    assert is_memoized(article, "linked_vehicle_ids")
    assert not is_memoized(article, "linked_vehicles")

    assert [v.id for v in article.linked_vehicles] == [1, 2, 3]
    assert len(transport.calls_for(operations.ARTICLE_LINKED_TARGETS)) == 1
    assert len(transport.calls_for(operations.VEHICLES_BY_IDS)) == 2


def test_article_without_links_makes_no_vehicle_request(catalog, transport, make_response):
    transport.responses[operations.ARTICLE_LINKED_TARGETS] = make_response([])
    article = make_article(catalog)

    assert article.linked_vehicles == []
    assert transport.calls_for(operations.VEHICLES_BY_IDS) == []
