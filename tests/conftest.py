import pytest

HEADER_LINE = "Task Link,Actioned Date,All Agent Flags,All QA Flags,Agent"


@pytest.fixture
def sample_csv() -> str:
    """A small export with one row that has no QA flags."""
    return "\n".join(
        [
            HEADER_LINE,
            'url1,2024-01-01,"Spam::L1A,Other",Spam::L1A,agent1',
            "url2,2024-01-02,Spam::Dropped,,agent2",
            "url3,2024-01-03,,Abuse::Hate,agent3",
            "",
        ]
    )


@pytest.fixture
def bad_header_csv() -> str:
    return "Link,Date,Agent Flags,QA Flags,Agent\nurl1,2024-01-01,A,A,agent1\n"
