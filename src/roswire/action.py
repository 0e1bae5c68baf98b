""" A client for the actionlib protocol, layered on five topics scoped to
    the action server's name: goal, cancel, status, feedback and result.
"""

import logging
import random
import threading
import time

from .events import Events
from .protocol.message import Message
from .topic import Topic

logger = logging.getLogger(__name__)


class ActionClient:
    """ Talk to the action server *server_name*, such as ``/fibonacci``,
        serving the action type *action_name*, such as
        ``actionlib_tutorials/FibonacciAction``.

        Goals created via :func:`goal` are tracked by their identifier;
        status, feedback and result messages naming a goal this client does
        not know are ignored, since other clients may share the server.

        If a *timeout* in seconds is specified, the ``timeout`` event is
        emitted if no status message at all arrives from the server in
        that time.

        The goal table keeps every goal for the life of the client unless
        *evict_finished* is True, in which case a goal is dropped once its
        result has been delivered; :func:`discard` drops one explicitly.
    """

    def __init__(self, ros, server_name, action_name, timeout=None, evict_finished=False):

        self.ros = ros
        self.server_name = server_name
        self.action_name = action_name
        self.timeout = timeout
        self.evict_finished = evict_finished
        self.goals = dict()
        self.received_status = False
        self.events = Events('timeout')

        self._goals_lock = threading.Lock()
        self._timer = None

        self.goal_topic = Topic(ros, server_name + '/goal', action_name + 'Goal')
        self.cancel_topic = Topic(ros, server_name + '/cancel', 'actionlib_msgs/GoalID')
        self.status_topic = Topic(ros, server_name + '/status', 'actionlib_msgs/GoalStatusArray')
        self.feedback_topic = Topic(ros, server_name + '/feedback', action_name + 'Feedback')
        self.result_topic = Topic(ros, server_name + '/result', action_name + 'Result')

        self.goal_topic.advertise()
        self.cancel_topic.advertise()

        self.status_topic.subscribe(self._status_incoming)

        if timeout:
            self._timer = threading.Timer(timeout, self._check_server)
            self._timer.daemon = True
            self._timer.start()

        self.feedback_topic.subscribe(self._feedback_incoming)
        self.result_topic.subscribe(self._result_incoming)


    def __repr__(self):
        return "ActionClient(%s, %s)" % (repr(self.server_name), repr(self.action_name))


    def on(self, name, callback):
        self.events.on(name, callback)


    def once(self, name, callback):
        self.events.once(name, callback)


    def off(self, name, callback=None):
        self.events.off(name, callback)


    def _check_server(self):

        if self.received_status == False:
            logger.warning("%s: no status from the action server after %.3g seconds", self.server_name, self.timeout)
            self.events.emit('timeout')


    def _lookup(self, status):
        """ Return the goal named by a GoalStatus message, or None.
        """

        try:
            goal_id = status['goal_id']['id']
        except (KeyError, TypeError):
            return None

        with self._goals_lock:
            return self.goals.get(goal_id)


    def _status_incoming(self, message):

        self.received_status = True

        for status in message.get('status_list') or ():
            goal = self._lookup(status)
            if goal is not None:
                goal._on_status(status)


    def _feedback_incoming(self, message):

        status = message.get('status')
        goal = self._lookup(status)

        if goal is not None:
            goal._on_status(status)
            goal._on_feedback(message.get('feedback'))


    def _result_incoming(self, message):

        status = message.get('status')
        goal = self._lookup(status)

        if goal is not None:
            goal._on_status(status)
            goal._on_result(message.get('result'))

            if self.evict_finished == True:
                self.discard(goal)


    def goal(self, goal_message):
        """ Create a :class:`Goal` for *goal_message*; it is sent when its
            :func:`Goal.send` method is called.
        """

        return Goal(self, goal_message)


    def _track(self, goal):

        with self._goals_lock:
            self.goals[goal.goal_id] = goal


    def discard(self, goal):
        """ Stop tracking *goal*; no further events will be delivered to it.
        """

        with self._goals_lock:
            self.goals.pop(goal.goal_id, None)


    def cancel(self):
        """ Ask the action server to cancel every goal. The empty identifier
            means all goals, by actionlib convention.
        """

        self.cancel_topic.publish(Message())


# end of class ActionClient



class Goal:
    """ One goal sent to an action server. The *goal_message* is the goal
        part of the action's Goal message; the goal identifier and stamp are
        filled in here.

        Events, registered via :func:`on` or :func:`once`:

        * ``status`` -- with the latest actionlib_msgs/GoalStatus
        * ``feedback`` -- with the latest feedback
        * ``result`` -- with the result; the goal is then finished
        * ``timeout`` -- the timeout given to :func:`send` expired first

        :ivar status: The last status received, or None.
        :ivar feedback: The last feedback received, or None.
        :ivar result: The result, or None until the goal is finished.
        :ivar sent: True once :func:`send` has published the goal.
        :ivar is_finished: True once a result has arrived.
    """

    def __init__(self, action_client, goal_message):

        self.action_client = action_client
        self.is_finished = False
        self.status = None
        self.result = None
        self.feedback = None
        self.events = Events('status', 'feedback', 'result', 'timeout')
        self.goal_id = "goal_%s_%d" % (random.random(), int(time.time() * 1000))

        goal_id = dict()
        goal_id['stamp'] = {'secs': 0, 'nsecs': 0}
        goal_id['id'] = self.goal_id

        self.goal_message = Message(goal_id=goal_id, goal=goal_message)
        self.sent = False
        self.timeout = None
        self._timer = None

        action_client._track(self)


    def __repr__(self):
        return "Goal(%s, finished=%s)" % (repr(self.goal_id), self.is_finished)


    def on(self, name, callback):
        self.events.on(name, callback)


    def once(self, name, callback):
        self.events.once(name, callback)


    def off(self, name, callback=None):
        self.events.off(name, callback)


    def _on_status(self, status):

        self.status = status
        self.events.emit('status', status)


    def _on_feedback(self, feedback):

        self.feedback = feedback
        self.events.emit('feedback', feedback)


    def _on_result(self, result):

        self.is_finished = True
        self.result = result
        self.events.emit('result', result)


    def _check_finished(self):

        if self.is_finished == False:
            logger.warning("goal %s: not finished after %.3g seconds", self.goal_id, self.timeout)
            self.events.emit('timeout')


    def send(self, timeout=None):
        """ Publish the goal. If a *timeout* in seconds is specified, the
            ``timeout`` event is emitted if no result has arrived by then.
            That is purely local: the goal is not cancelled.
        """

        self.action_client.goal_topic.publish(self.goal_message)
        self.sent = True

        if timeout:
            self.timeout = timeout
            self._timer = threading.Timer(timeout, self._check_finished)
            self._timer.daemon = True
            self._timer.start()


    def cancel(self):
        """ Ask the action server to cancel this goal. Any timeout armed by
            :func:`send` still fires if the goal does not finish.
        """

        self.action_client.cancel_topic.publish(Message(id=self.goal_id))


# end of class Goal


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
