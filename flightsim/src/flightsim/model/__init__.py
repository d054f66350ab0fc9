"""
This module contains the application's data model. The primary class is Flight; all other model classes support it,
either as reference data shared by many flights (AircraftClass, Operator, Airport) or as state the engine derives from
the fleet (FilterCriteria, AnalysisResult).

All model objects can be serialized to JSON by a convenience method that calls into the `json` package with a special
default serializer (and sets a few other serialization options as well). Example:

    flight = model.Flight(...)
    model.json.dumps({"selected": flight})

This is equivalent to:

    flight = model.Flight(...)
    json.dumps({"selected": flight}, default=<private serialization function>, allow_nan=False, separators=(",", ":"))
"""
