"""Shared fixtures: a small C# library with source, tests and a docs corpus."""

import json
from pathlib import Path

import pytest

from code_trace_mcp.indexing.store import clear_holders
from code_trace_mcp.tools._internal.project import forget_layouts

DISPATCHER_CS = """\
namespace Sample.Core;

/// <summary>Routes messages to their handlers.</summary>
/// <tests>tests/Sample.Tests/DispatcherTests.cs:Publish_DeliversToHandler</tests>
/// <docs>core-concepts/dispatcher</docs>
public sealed class Dispatcher : IDispatcher
{
    /// <tests>DispatcherTests.cs:Publish_DeliversToHandler</tests>
    /// <tests>DispatcherTests.cs:Publish_WithoutHandler_Throws</tests>
    /// <docs>/v1.2/core-concepts/publishing.md</docs>
    public async Task PublishAsync<T>(T message)
    {
        await Task.CompletedTask;
    }

    /// <tests>DispatcherTests.cs:HandlerCount_StartsAtZero</tests>
    public int HandlerCount { get; private set; }
}
"""

IDISPATCHER_CS = """\
namespace Sample.Core;

public interface IDispatcher
{
    Task PublishAsync<T>(T message);
}
"""

EVENT_BUS_CS = """\
namespace Sample.Messaging;

/// <tests>EventBusTests.cs</tests>
/// <tests>EventBusTests.cs:Publish_FansOut</tests>
public class EventBus
{
    // <tests>EventBusTests.cs:Orphaned</tests>




    public void Publish(object message) { }
}
"""

STALE_CS = """\
/// <tests>DispatcherTests.cs:Ghost</tests>
public class Ghost { }
"""

DISPATCHER_TESTS_CS = """\
using Xunit;

namespace Sample.Tests;

public class DispatcherTests
{
    [Fact]
    public async Task Publish_DeliversToHandler()
    {
    }

    [Fact]
    public void Publish_WithoutHandler_Throws()
    {
    }

    [Theory]
    [InlineData(0)]
    public void HandlerCount_StartsAtZero(int expected)
    {
    }
}
"""

WIDGET_TESTS_CS = """\
using NUnit.Framework;

public class WidgetTests
{
    [Test]
    public void Spin_Works()
    {
    }
}
"""

TEST_HELPERS_CS = """\
internal static class TestHelpers
{
    public static void Reset() { }
}
"""

DOC_PAGES = [
    {"slug": "dispatcher", "title": "Dispatcher", "category": "Core Concepts"},
    {"slug": "getting-started.md", "title": "Getting Started", "category": "Guides"},
]


def write_files(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def _reset_holders():
    """Each test starts without any snapshot or project layout cached in memory."""
    clear_holders()
    forget_layouts()
    yield
    clear_holders()
    forget_layouts()


@pytest.fixture
def sample_library(tmp_path):
    """A project laid out the default way (src/**, tests/**)."""
    write_files(tmp_path, {
        "src/Core/Dispatcher.cs": DISPATCHER_CS,
        "src/Core/IDispatcher.cs": IDISPATCHER_CS,
        "src/Messaging/EventBus.cs": EVENT_BUS_CS,
        "src/obj/Debug/Stale.cs": STALE_CS,
        "tests/Sample.Tests/DispatcherTests.cs": DISPATCHER_TESTS_CS,
        "tests/Sample.Tests/WidgetTests.cs": WIDGET_TESTS_CS,
        "tests/Sample.Tests/TestHelpers.cs": TEST_HELPERS_CS,
        "docs/search-index.json": json.dumps(DOC_PAGES),
    })
    return tmp_path


@pytest.fixture
def write_project():
    """Write {relative path: content} under a project root."""
    return write_files
