from typing import Optional

from sqlalchemy.orm import Session
from models.log import Log

def write_log(db: Session, *, action, resource, status="SUCCESS", meta=None, commit=True, keep: Optional[int] = None):
    entry = Log(action=action, resource=resource, status=status, meta=meta or {})
    db.add(entry)
    if keep:
        prune_logs(db, keep)
    if commit:
        db.commit()


def prune_logs(db: Session, keep: int):
    """Delete all but the newest ``keep`` audit rows."""
    db.flush()
    cutoff = db.query(Log.id).order_by(Log.id.desc()).offset(keep).limit(1).scalar()
    if cutoff is not None:
        db.query(Log).filter(Log.id <= cutoff).delete(synchronize_session=False)
