import pytest

from schoolforms.workflow import FormWorkflow


class Host:
    """Stands in for the page that opens a form: records calls and effects."""

    def __init__(self):
        self.outcome = {"success": True}
        self.submitted = []
        self.events = []

    async def create(self, data):
        self.submitted.append(("create", data))
        return self.outcome

    async def update(self, data):
        self.submitted.append(("update", data))
        return self.outcome

    def notify(self, message):
        self.events.append(("notify", message))

    def close(self):
        self.events.append(("close",))

    def refresh(self):
        self.events.append(("refresh",))

    def workflow(self, form_class, mode="create", data=None, references=None, **kwargs):
        kwargs.setdefault("on_create", self.create)
        kwargs.setdefault("on_update", self.update)
        return FormWorkflow(
            form_class,
            mode,
            data,
            references,
            notify=self.notify,
            close=self.close,
            refresh=self.refresh,
            **kwargs,
        )


@pytest.fixture
def host():
    return Host()
