import logging
from datetime import date

import pytest

from flight_aggregator.application.services import FlightSearchService
from flight_aggregator.domain.exceptions import InvalidSearchCriteria
from flight_aggregator.domain.models import AirportCode, SearchCriteria


def fares(flights):
    return [str(flight.fare) for flight in flights]


class TestValidation:
    """Regras de negócio aplicadas antes do fan-out."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("passengers", [0, 5, -1])
    async def test_rejects_passengers_out_of_range(self, criteria, fake_supplier, passengers):
        supplier = fake_supplier("CrazyAir")
        service = FlightSearchService([supplier])

        with pytest.raises(InvalidSearchCriteria, match="between 1 and 4"):
            await service.search(criteria.model_copy(update={"passengers": passengers}))

        assert supplier.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("passengers", [1, 2, 3, 4])
    async def test_accepts_passengers_in_range(self, criteria, fake_supplier, make_flight, passengers):
        service = FlightSearchService([fake_supplier("CrazyAir", [make_flight("100.00")])])

        flights = await service.search(criteria.model_copy(update={"passengers": passengers}))

        assert fares(flights) == ["100.00"]

    @pytest.mark.asyncio
    async def test_rejects_same_origin_and_destination_bypassing_constructor(self, fake_supplier):
        lhr = AirportCode.create("LHR")
        criteria = SearchCriteria.model_construct(
            origin=lhr, destination=lhr, departure_date=date(2023, 1, 1), return_date=None, passengers=1
        )
        service = FlightSearchService([fake_supplier("CrazyAir")])

        with pytest.raises(InvalidSearchCriteria, match="cannot be the same"):
            await service.search(criteria)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "origin, destination, message",
        [
            ("", "AMS", "Origin airport code cannot be empty"),
            ("  ", "AMS", "Origin airport code cannot be empty"),
            (None, "AMS", "Origin airport code cannot be empty"),
            ("LHR", "", "Destination airport code cannot be empty"),
        ],
    )
    async def test_rejects_blank_codes(self, fake_supplier, origin, destination, message):
        criteria = SearchCriteria.model_construct(
            origin=origin,
            destination=destination,
            departure_date=date(2023, 1, 1),
            return_date=None,
            passengers=1,
        )
        service = FlightSearchService([fake_supplier("CrazyAir")])

        with pytest.raises(InvalidSearchCriteria, match=message):
            await service.search(criteria)


class TestAggregation:
    """Fan-out, isolamento de falhas, merge e ordenação."""

    @pytest.mark.asyncio
    async def test_sorts_by_fare_across_suppliers(self, criteria, fake_supplier, make_flight):
        service = FlightSearchService([
            fake_supplier("CrazyAir", [make_flight("100.00", supplier="CrazyAir")]),
            fake_supplier("ToughJet", [make_flight("80.00", supplier="ToughJet")]),
        ])

        flights = await service.search(criteria)

        assert fares(flights) == ["80.00", "100.00"]
        assert [f.supplier for f in flights] == ["ToughJet", "CrazyAir"]

    @pytest.mark.asyncio
    async def test_calls_every_supplier_with_criteria(self, criteria, fake_supplier):
        suppliers = [fake_supplier("A"), fake_supplier("B"), fake_supplier("C")]

        await FlightSearchService(suppliers).search(criteria)

        assert all(s.calls == [criteria] for s in suppliers)

    @pytest.mark.asyncio
    async def test_failing_supplier_is_isolated(self, criteria, fake_supplier, make_flight, caplog):
        service = FlightSearchService([
            fake_supplier("CrazyAir", error=RuntimeError("boom")),
            fake_supplier("ToughJet", [make_flight("95.50", supplier="ToughJet")]),
        ])
        caplog.set_level(logging.ERROR)

        flights = await service.search(criteria)

        assert len(flights) == 1
        assert flights[0].supplier == "ToughJet"
        assert any("CrazyAir" in r.getMessage() and "boom" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_all_suppliers_failing_returns_empty(self, criteria, fake_supplier):
        service = FlightSearchService([
            fake_supplier("CrazyAir", error=RuntimeError("down")),
            fake_supplier("ToughJet", error=ValueError("bad payload")),
        ])

        assert await service.search(criteria) == []

    @pytest.mark.asyncio
    async def test_no_suppliers_returns_empty(self, criteria):
        assert await FlightSearchService([]).search(criteria) == []

    @pytest.mark.asyncio
    async def test_ties_keep_supplier_order(self, criteria, fake_supplier, make_flight):
        service = FlightSearchService([
            fake_supplier("CrazyAir", [
                make_flight("120.00", supplier="CrazyAir", airline="BA"),
                make_flight("99.99", supplier="CrazyAir", airline="EasyJet"),
            ]),
            fake_supplier("ToughJet", [make_flight("99.99", supplier="ToughJet", airline="KLM")]),
        ])

        flights = await service.search(criteria)

        assert [(f.supplier, f.airline) for f in flights] == [
            ("CrazyAir", "EasyJet"),
            ("ToughJet", "KLM"),
            ("CrazyAir", "BA"),
        ]

    @pytest.mark.asyncio
    async def test_slow_supplier_does_not_reorder_merge(self, criteria, fake_supplier, make_flight):
        service = FlightSearchService([
            fake_supplier("Slow", [make_flight("50.00", supplier="Slow")], delay=0.05),
            fake_supplier("Fast", [make_flight("50.00", supplier="Fast")]),
        ])

        flights = await service.search(criteria)

        assert [f.supplier for f in flights] == ["Slow", "Fast"]

    @pytest.mark.asyncio
    async def test_supplier_timeout_counts_as_failure(self, criteria, fake_supplier, make_flight, caplog):
        service = FlightSearchService(
            [
                fake_supplier("Stuck", [make_flight("10.00", supplier="Stuck")], delay=5),
                fake_supplier("ToughJet", [make_flight("95.50", supplier="ToughJet")]),
            ],
            supplier_timeout=0.05,
        )
        caplog.set_level(logging.ERROR)

        flights = await service.search(criteria)

        assert [f.supplier for f in flights] == ["ToughJet"]
        assert any("Stuck timed out" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_supplier_raised_timeout_without_deadline_is_isolated(
        self, criteria, fake_supplier, make_flight, caplog
    ):
        service = FlightSearchService([
            fake_supplier("CrazyAir", error=TimeoutError("read timeout")),
            fake_supplier("ToughJet", [make_flight("95.50", supplier="ToughJet")]),
        ])
        caplog.set_level(logging.ERROR)

        flights = await service.search(criteria)

        assert [f.supplier for f in flights] == ["ToughJet"]
        messages = [r.getMessage() for r in caplog.records]
        assert any("Error searching flights from CrazyAir" in m and "read timeout" in m for m in messages)
        assert not any("timed out after" in m for m in messages)

    def test_suppliers_are_read_only(self, fake_supplier):
        service = FlightSearchService([fake_supplier("A")])
        assert isinstance(service.suppliers, tuple)
