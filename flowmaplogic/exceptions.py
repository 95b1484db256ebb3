class FMLError(Exception): ...


class MappingError(FMLError): ...


class AcquisitionError(FMLError): ...


class SnapshotError(FMLError): ...


class SinkError(FMLError): ...


def require(condition: bool, message: str, exc: type[FMLError] = FMLError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
