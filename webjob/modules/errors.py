class WebJobError(Exception):
    pass

class ConfigurationError(WebJobError):
    pass

class WorkIterationError(WebJobError):
    def __init__(self, iteration: int, cause: BaseException):
        self.iteration = iteration
        self.cause = cause
        super().__init__(f"Iteration {iteration} failed: {cause}")
