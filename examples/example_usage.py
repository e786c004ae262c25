"""Example: run one monthly pay run through the service layer.

Generates payroll for every active employee for last month, approves pending
overtime, then submits the batch for payment and prints a summary.
"""

from datetime import date

from payroll_engine.common.datetime_utils import month_bounds
from payroll_engine.core.enums import Role
from payroll_engine.core.exceptions import DomainError
from payroll_engine.main import create_container

ADMIN_ID = 1


def main():
    container = create_container()
    service = container.payroll_service

    today = date.today()
    year, month = (today.year, today.month - 1) if today.month > 1 else (today.year - 1, 12)
    start, end = month_bounds(year, month)

    report = service.generate_payroll(current_role=Role.ADMIN, period_start=start, period_end=end, admin_id=ADMIN_ID)
    print(f"created={len(report.created)} skipped={len(report.failures)}")
    for failure in report.failures:
        print(f"  employee {failure.employee_id}: {failure.reason}")

    for record in report.created:
        if record.overtime_approval.pending:
            try:
                service.approve_overtime(
                    current_role=Role.ADMIN,
                    admin_id=ADMIN_ID,
                    payroll_id=record.payroll_id,
                    reason="Month-end rush",
                )
            except DomainError as e:
                print(f"  payroll {record.payroll_id}: {e}")

    if not report.created:
        container.close()
        return

    payments = service.submit_payments(
        current_role=Role.ADMIN,
        payroll_ids=[r.payroll_id for r in report.created],
        admin_id=ADMIN_ID,
    )
    print(f"paid={len(payments.paid)} processing={len(payments.processing)} failed={len(payments.failures)}")
    for failure in payments.failures:
        print(f"  payroll {failure.payroll_id}: {failure.reason}")

    stats = service.get_statistics(current_role=Role.ADMIN, start_date=start, end_date=end)
    print(f"gross={stats.total_gross_pay} net={stats.total_net_pay} paid={stats.successful_payments}")
    container.close()


if __name__ == "__main__":
    main()
