import pytest
from unittest.mock import patch
from sqlalchemy.orm import Session

from budget_planner.app.models.models import Budget, CategoryAllocation
from budget_planner.app.schemas.ledger import BatchCall, CallReceipt
from budget_planner.app.services.batch_service import apply_batch


def call(operation, *args):
    return BatchCall(operation=operation, args=list(args))


class TestApplyBatch:
    """Batches apply in order, one receipt per call."""

    def test_initialize_budget(self, db_session: Session):
        receipts = apply_batch(db_session, [call("initialize-budget", 1, 10000)], sender="deployer")

        assert [r.render() for r in receipts] == ["(ok true)"]
        assert db_session.get(Budget, 1).created_by == "deployer"

    def test_allocation_and_spending(self, db_session: Session):
        receipts = apply_batch(db_session, [
            call("initialize-budget", 1, 10000),
            call("add-category-allocation", 1, "groceries", 3000),
            call("record-spending", 1, "groceries", 500),
        ])

        assert [r.render() for r in receipts] == ["(ok true)", "(ok true)", "(ok true)"]

    def test_alert_returns_id(self, db_session: Session):
        receipts = apply_batch(db_session, [
            call("initialize-budget", 1, 10000),
            call("add-budget-alert", 1, "groceries", 80),
        ])

        assert receipts[1].value == 1
        assert receipts[1].render() == "(ok u1)"

    def test_check_budget_sequence(self, db_session: Session):
        receipts = apply_batch(db_session, [
            call("initialize-budget", 1, 1000),
            call("record-spending", 1, "general", 500),
            call("check-budget", 1),
            call("record-spending", 1, "general", 600),
            call("check-budget", 1),
        ])

        assert [r.render() for r in receipts] == [
            "(ok true)", "(ok true)", "(ok false)", "(ok true)", "(ok true)"
        ]

    def test_failed_call_does_not_stop_batch(self, db_session: Session):
        receipts = apply_batch(db_session, [
            call("initialize-budget", 1, 1000),
            call("initialize-budget", 1, 2000),
            call("add-category-allocation", 2, "groceries", 100),
            call("add-budget-alert", 1, "groceries", 120),
            call("add-budget-alert", 1, "groceries", 90),
        ])

        assert [r.render() for r in receipts] == [
            "(ok true)",
            "(err AlreadyExists)",
            "(err BudgetNotFound)",
            "(err InvalidThreshold)",
            "(ok u1)",
        ]
        assert [r.index for r in receipts] == [0, 1, 2, 3, 4]
        assert db_session.get(Budget, 1).total == 1000
        assert db_session.query(CategoryAllocation).count() == 0

    def test_unknown_operation(self, db_session: Session):
        receipts = apply_batch(db_session, [call("delete-budget", 1)])

        assert receipts[0].ok is False
        assert receipts[0].error == "UnknownOperation"

    @pytest.mark.parametrize("args", [[], [1], [1, 2, 3]])
    def test_wrong_arity(self, db_session: Session, args):
        receipts = apply_batch(db_session, [BatchCall(operation="initialize-budget", args=args)])

        assert receipts[0].render() == "(err InvalidArguments)"

    def test_spending_past_limit_keeps_batch_going(self, db_session: Session):
        receipts = apply_batch(db_session, [
            call("initialize-budget", 1, 10),
            call("record-spending", 1, "general", 2**62),
            call("record-spending", 1, "general", 2**62),
            call("check-budget", 1),
        ])

        assert [r.render() for r in receipts] == [
            "(ok true)", "(ok true)", "(err InvalidAmount)", "(ok true)"
        ]
        assert db_session.get(Budget, 1).spent_total == 2**62

    def test_huge_amount_rejected(self, db_session: Session):
        receipts = apply_batch(db_session, [
            call("initialize-budget", 1, 2**64),
            call("initialize-budget", 1, 5),
        ])

        assert [r.render() for r in receipts] == ["(err InvalidAmount)", "(ok true)"]

    def test_storage_failure_keeps_batch_going(self, db_session: Session):
        real_commit = db_session.commit
        commits = []

        def commit_failing_once():
            commits.append(1)
            if len(commits) == 2:
                raise OverflowError("Python int too large to convert to SQLite INTEGER")
            return real_commit()

        with patch.object(db_session, "commit", side_effect=commit_failing_once):
            receipts = apply_batch(db_session, [
                call("initialize-budget", 1, 1000),
                call("record-spending", 1, "general", 300),
                call("record-spending", 1, "general", 40),
            ])

        assert [r.render() for r in receipts] == ["(ok true)", "(err StorageError)", "(ok true)"]
        assert db_session.get(Budget, 1).spent_total == 40

    def test_string_amount_rejected(self, db_session: Session):
        receipts = apply_batch(db_session, [
            call("initialize-budget", 1, 1000),
            call("record-spending", 1, "general", "500"),
        ])

        assert receipts[1].render() == "(err InvalidAmount)"
        assert db_session.get(Budget, 1).spent_total == 0


class TestCallReceipt:
    """Tagged rendering of receipts."""

    def test_render_bool(self):
        assert CallReceipt(index=0, operation="check-budget", ok=True, value=False).render() == "(ok false)"

    def test_render_uint(self):
        assert CallReceipt(index=0, operation="add-budget-alert", ok=True, value=7).render() == "(ok u7)"

    def test_render_error(self):
        receipt = CallReceipt(index=0, operation="check-budget", ok=False, error="BudgetNotFound")
        assert receipt.render() == "(err BudgetNotFound)"
