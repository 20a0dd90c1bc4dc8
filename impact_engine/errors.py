class ImpactEngineError(Exception):
    status_code = 500


class InvalidScenarioId(ImpactEngineError):
    status_code = 400


class ScenarioNotFound(ImpactEngineError):
    status_code = 404


class InvalidScenarioData(ImpactEngineError):
    """Raised when a scenario's physical fields cannot yield a mass or velocity."""

    status_code = 422


class StoreError(ImpactEngineError):
    status_code = 502


class PersistenceFailure(StoreError):
    pass
