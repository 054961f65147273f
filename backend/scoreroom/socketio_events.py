from typing import Dict, NamedTuple

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from scoreroom.errors import MalformedRequest, SessionError, SessionNotFound
from scoreroom.models import Category
from scoreroom.schemas import (
    AdvanceCategory,
    CreateSession,
    JoinSession,
    LeaveSession,
    SubmitScore,
    parse_payload,
)
from scoreroom.services.sessions import membership, progression, scoring
from scoreroom.store import SessionStore


def room_for(session_id: str) -> str:
    return f"session:{session_id}"


class ConnectionContext(NamedTuple):
    session_id: str
    member_id: str
    member_name: str


class SessionProtocolHandler:
    """Socket.IO events for scoring sessions.

    Each inbound event is validated, applied to the store under the
    session's lock and broadcast to the session room before the lock is
    released, so every room sees mutations in the order they were applied.
    Failures go back to the caller only, as a plain string on ``error``.
    """

    def __init__(self, socketio, store: SessionStore, namespace: str = '/'):
        self.socketio = socketio
        self.store = store
        self.namespace = namespace
        # sid -> member identity, filled on join, read on disconnect
        self.connections: Dict[str, ConnectionContext] = {}

    def register(self) -> None:
        ns = self.namespace
        self.socketio.on_event('connect', self.handle_connect, namespace=ns)
        self.socketio.on_event('disconnect', self.handle_disconnect, namespace=ns)
        self.socketio.on_event('session:create', self.handle_create, namespace=ns)
        self.socketio.on_event('session:join', self.handle_join, namespace=ns)
        self.socketio.on_event('session:leave', self.handle_leave, namespace=ns)
        self.socketio.on_event('score:submit', self.handle_submit_score, namespace=ns)
        self.socketio.on_event('category:advance', self.handle_advance, namespace=ns)
        self.socketio.on_event('ping', self.handle_ping, namespace=ns)

    # ---- transport helpers ----

    def _sid(self) -> str:
        # request.sid exists in Socket.IO context
        return request.sid  # type: ignore

    def _broadcast(self, event, payload, session_id):
        self.socketio.emit(event, payload, to=room_for(session_id), namespace=self.namespace)

    def _reject(self, event, exc: SessionError):
        if isinstance(exc, MalformedRequest):
            current_app.logger.warning(f"[reject] event={event} sid={self._sid()} reason={exc.message}")
        else:
            current_app.logger.info(f"[reject] event={event} sid={self._sid()} reason={exc.message}")
        emit('error', exc.message)

    # ---- events ----

    def handle_connect(self, auth=None):
        emit('connected', {'message': 'Connected to scoring server'})

    def handle_ping(self, data=None):
        emit('pong', {} if data is None else data)

    def handle_create(self, data=None):
        try:
            req = parse_payload(CreateSession, data)
        except SessionError as exc:
            self._reject('session:create', exc)
            return
        session = self.store.create(
            req.session_name,
            req.facilitator_name,
            [Category(id=c.id, name=c.name) for c in req.categories],
        )
        join_room(room_for(session.id))
        current_app.logger.info(
            f"[create] session={session.id} name={session.name!r} categories={len(session.categories)}"
        )
        # Nobody else knows the id yet, so the creator's snapshot needs no lock
        emit('session:updated', session.to_dict())

    def handle_join(self, data=None):
        try:
            req = parse_payload(JoinSession, data)
            with self.store.locked(req.session_id) as session:
                member = membership.add_member(session, req.member_name, self.store.new_id)
                self.store.put(session)
                join_room(room_for(session.id))
                self.connections[self._sid()] = ConnectionContext(session.id, member.id, member.name)
                current_app.logger.info(
                    f"[join] session={session.id} member={member.id} name={member.name!r} members={len(session.members)}"
                )
                self._broadcast('session:updated', session.to_dict(), session.id)
                self._broadcast('member:joined', member.to_dict(), session.id)
        except SessionError as exc:
            self._reject('session:join', exc)

    def handle_leave(self, data=None):
        try:
            req = parse_payload(LeaveSession, data)
        except SessionError as exc:
            self._reject('session:leave', exc)
            return
        try:
            with self.store.locked(req.session_id) as session:
                membership.remove_member(session, req.member_id)
                self.store.put(session)
                leave_room(room_for(session.id))
                ctx = self.connections.get(self._sid())
                if ctx and ctx.session_id == session.id and ctx.member_id == req.member_id:
                    self.connections.pop(self._sid(), None)
                current_app.logger.info(f"[leave] session={session.id} member={req.member_id}")
                self._broadcast('session:updated', session.to_dict(), session.id)
                self._broadcast('member:left', req.member_id, session.id)
        except SessionNotFound:
            return

    def handle_submit_score(self, data=None):
        try:
            req = parse_payload(SubmitScore, data)
            with self.store.locked(req.session_id) as session:
                result = scoring.submit_score(
                    session,
                    req.category_id,
                    req.member_id,
                    req.member_name,
                    req.score,
                    self.store.now(),
                )
                self.store.put(session)
                current_app.logger.info(
                    f"[score] session={session.id} category={result.category_id} member={req.member_id} "
                    f"responses={result.total_responses}/{result.expected_responses} mean={result.mean_score}"
                )
                self._broadcast('score:submitted', result.to_dict(), session.id)
                self._broadcast('session:updated', session.to_dict(), session.id)
        except SessionError as exc:
            self._reject('score:submit', exc)

    def handle_advance(self, data=None):
        try:
            req = parse_payload(AdvanceCategory, data)
            with self.store.locked(req.session_id) as session:
                completed = progression.advance_category(session)
                self.store.put(session)
                if completed:
                    current_app.logger.info(f"[complete] session={session.id} results={len(session.results)}")
                    self._broadcast('session:completed', session.results_to_dict(), session.id)
                else:
                    current_app.logger.info(
                        f"[advance] session={session.id} index={session.current_category_index}"
                    )
                    self._broadcast('category:next', session.current_category_index, session.id)
                self._broadcast('session:updated', session.to_dict(), session.id)
        except SessionError as exc:
            self._reject('category:advance', exc)

    def handle_disconnect(self, reason=None):
        ctx = self.connections.pop(self._sid(), None)
        if not ctx:
            return
        try:
            with self.store.locked(ctx.session_id) as session:
                member = membership.mark_offline(session, ctx.member_id)
                if member is None:
                    return
                self.store.put(session)
                current_app.logger.info(
                    f"[disconnect] session={session.id} member={member.id} name={member.name!r} reason={reason}"
                )
                self._broadcast('session:updated', session.to_dict(), session.id)
        except SessionNotFound:
            return
