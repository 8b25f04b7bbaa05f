# Journal_app/models/trade.py

from datetime import datetime

from Journal_app.extensions import db
from Journal_app.utils import isoformat_z


class Trade(db.Model):
    """A closed trade logged by a user"""
    __tablename__ = 'trades'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    symbol = db.Column(db.String(50), nullable=False)
    trade_type = db.Column(db.String(10), nullable=False)  # long, short
    entry_price = db.Column(db.Float, nullable=False)
    exit_price = db.Column(db.Float, nullable=False)
    position_size = db.Column(db.Float, nullable=False)
    entry_date = db.Column(db.DateTime, nullable=False)
    exit_date = db.Column(db.DateTime, nullable=False)
    profit_loss = db.Column(db.Float, nullable=False)
    fees = db.Column(db.Float, default=0.0)
    instrument_type = db.Column(db.String(30), nullable=False)  # stocks, options, futures, ...
    setup = db.Column(db.String(100))  # breakout, pullback, ...
    risk_reward_ratio = db.Column(db.String(20))
    tags = db.Column(db.JSON, default=list)
    notes = db.Column(db.Text)
    screenshots = db.Column(db.JSON, default=list)
    status = db.Column(db.String(10), nullable=False)  # win, loss, breakeven
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_trades_user_exit', 'user_id', 'exit_date'),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "symbol": self.symbol,
            "tradeType": self.trade_type,
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "positionSize": self.position_size,
            "entryDate": isoformat_z(self.entry_date),
            "exitDate": isoformat_z(self.exit_date),
            "profitLoss": self.profit_loss,
            "fees": self.fees or 0.0,
            "instrumentType": self.instrument_type,
            "setup": self.setup,
            "riskRewardRatio": self.risk_reward_ratio,
            "tags": list(self.tags or []),
            "notes": self.notes,
            "screenshots": list(self.screenshots or []),
            "status": self.status,
            "createdAt": isoformat_z(self.created_at),
        }
