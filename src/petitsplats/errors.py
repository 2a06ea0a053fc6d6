class PetitsPlatsError(Exception):
    pass


class InvalidArgument(PetitsPlatsError, ValueError):
    pass


class ConfigError(PetitsPlatsError):
    pass


class MissingFileError(PetitsPlatsError):
    pass


class ValidationError(PetitsPlatsError):
    pass


class RecipeDataError(ValidationError):
    pass
