import pytest

from nparrot.tools import Messenger, ToolResult


def _recorder():
    received = []

    async def deliver(message):
        received.append(message)

    return received, deliver


def test_success_result():
    result = ToolResult.success("Sent message")
    assert result.is_error is False
    assert result.content == ("Sent message",)
    assert result.text == "Sent message"


def test_error_result():
    result = ToolResult.error("boom")
    assert result.is_error is True
    assert result.text == "boom"


def test_multi_item_text_joined():
    result = ToolResult(content=("a", "b"))
    assert result.text == "a\nb"
    assert result.is_error is False


@pytest.mark.asyncio
async def test_send_uses_deliver():
    received, deliver = _recorder()
    messenger = Messenger(deliver)
    result = await messenger.send("hello")
    assert result is None
    assert received == ["hello"]


@pytest.mark.asyncio
async def test_progress_uses_report_when_given():
    sent, deliver = _recorder()
    reported, report = _recorder()
    messenger = Messenger(deliver, report)
    progress_result = await messenger.progress("working")
    send_result = await messenger.send("done")
    assert progress_result is None
    assert send_result is None
    assert reported == ["working"]
    assert sent == ["done"]


@pytest.mark.asyncio
async def test_progress_falls_back_to_deliver():
    received, deliver = _recorder()
    messenger = Messenger(deliver)
    result = await messenger.progress("working")
    assert result is None
    assert received == ["working"]


@pytest.mark.asyncio
async def test_delivery_errors_propagate():
    async def failing(message):
        raise RuntimeError("offline")

    with pytest.raises(RuntimeError, match="offline"):
        await Messenger(failing).send("x")