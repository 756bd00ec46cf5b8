class InterviewPromptError(Exception):
    pass


class InterviewConfigError(InterviewPromptError):
    pass


class UnknownTemplateError(InterviewConfigError):
    pass


class UnsupportedLevelError(InterviewConfigError):
    pass


class InterviewValidationError(InterviewPromptError):
    pass


class InvalidScoreError(InterviewValidationError):
    pass


class SessionNotFoundError(InterviewPromptError):
    pass
