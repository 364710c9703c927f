from tictactoe import db, bcrypt
from flask_login import UserMixin
import time
import uuid


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


def generate_session_id():
    return uuid.uuid4().hex


class GameSession(db.Model):
    __tablename__ = 'game_session'
    id = db.Column(db.String(32), primary_key=True, default=generate_session_id)
    host_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    guest_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True, index=True)
    size = db.Column(db.Integer, nullable=False, default=3)
    board = db.Column(db.Text, nullable=False)  # JSON-encoded list of 'X' / 'O' / null, row-major
    active_mark = db.Column(db.String(1), nullable=False, default='X')
    phase = db.Column(db.String(32), nullable=False, default='waiting_for_guest')  # waiting_for_guest, active, finished
    outcome = db.Column(db.String(8), nullable=True)  # 'X', 'O', 'draw'
    version = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.Float, nullable=False, default=time.time)
    last_updated = db.Column(db.Float, nullable=False, default=time.time)

    host = db.relationship('User', foreign_keys=[host_id])
    guest = db.relationship('User', foreign_keys=[guest_id])
